# dense_layer/layers/Parameter.py
from enum import Enum

from ..errors import ShapeMismatchError


class ParameterType(Enum):
    WEIGHT = "weight"
    BIAS = "bias"


class Parameter:
    """
    A learnable tensor slot of a layer.

    `data` holds the value and `grad` the gradient accumulator, both with the
    shape fixed at declaration. Assigning to either copies into the existing
    storage, so references held by optimizers and kernels stay valid.
    """
    def __init__(self, kind, shape, trainable=True, device=None, data=None):
        self.kind = ParameterType(kind)
        self.shape = tuple(int(s) for s in shape)
        self.trainable = bool(trainable)
        self.device = device
        self._data = device.zeros(self.shape)
        self._grad = device.zeros(self.shape)
        if data is not None:
            self.data = data

    @property
    def data(self):
        return self._data

    @data.setter
    def data(self, value):
        self._assign(self._data, value, "data")

    @property
    def grad(self):
        return self._grad

    @grad.setter
    def grad(self, value):
        self._assign(self._grad, value, "grad")

    def _assign(self, storage, value, what):
        value = self.device.ensure_array(value, dtype=storage.dtype)
        if tuple(value.shape) != self.shape:
            raise ShapeMismatchError(
                f"cannot resize {self.kind.value} {what} from {self.shape} "
                f"to {tuple(value.shape)}"
            )
        storage[...] = value

    def zero_grad(self):
        self._grad[...] = 0.0

    def __repr__(self):
        return (
            f"Parameter({self.kind.value}, shape={self.shape}, "
            f"trainable={self.trainable})"
        )
