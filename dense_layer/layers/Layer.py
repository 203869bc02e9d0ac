# dense_layer/layers/Layer.py
from collections import namedtuple

from .Parameter import Parameter, ParameterType
from ..core.Engine import Engine, default_engine
from ..helpers.Backend import backend

Shape3d = namedtuple("Shape3d", ["width", "height", "depth"])


class Layer:
    """
    Base of every layer: owns the parameter slots and the engine, device
    and parallelize settings handed to kernels.

    Parameters are kept in declaration order; optimizers and checkpoints
    index them positionally.
    """
    def __init__(self, backend_type=None, parallelize=None, device=None):
        self._device = device if device is not None else backend
        self._engine = default_engine() if backend_type is None else Engine.parse(backend_type)
        self._parallelize = True if parallelize is None else bool(parallelize)
        self._parameters = []

    def _check_alive(self):
        # overridden by layers that can be moved from
        pass

    # Subclasses override as needed
    def forward(self, x):
        raise NotImplementedError

    def backward(self, x, y, grad_out):
        # Return grad wrt input
        raise NotImplementedError

    def fan_in_size(self):
        raise NotImplementedError

    def fan_out_size(self):
        raise NotImplementedError

    def in_shape(self):
        raise NotImplementedError

    def out_shape(self):
        raise NotImplementedError

    def layer_type(self):
        raise NotImplementedError

    # -------- parameter registration --------
    def add_parameter(self, kind, shape, trainable=True):
        param = Parameter(kind, shape, trainable=trainable, device=self._device)
        self._parameters.append(param)
        return param

    def parameters(self):
        self._check_alive()
        return list(self._parameters)

    def parameter(self, kind):
        self._check_alive()
        kind = ParameterType(kind)
        for p in self._parameters:
            if p.kind is kind:
                return p
        raise KeyError(kind.value)

    def params(self):
        # Return list of parameter ndarrays (e.g., [W, b])
        self._check_alive()
        return [p.data for p in self._parameters]

    def grads(self):
        # Return list of gradient ndarrays matching params()
        self._check_alive()
        return [p.grad for p in self._parameters]

    def parameter_pairs(self):
        """[param, grad] pairs of the trainable parameters, as optimizers take them."""
        self._check_alive()
        return [[p.data, p.grad] for p in self._parameters if p.trainable]

    def zero_grad(self):
        self._check_alive()
        for p in self._parameters:
            p.zero_grad()

    # -------- execution settings --------
    def engine(self):
        self._check_alive()
        return self._engine

    def set_backend_type(self, backend_type):
        self._check_alive()
        self._engine = Engine.parse(backend_type)

    def device(self):
        self._check_alive()
        return self._device

    def parallelize(self):
        self._check_alive()
        return self._parallelize

    def set_parallelize(self, parallelize):
        self._check_alive()
        self._parallelize = bool(parallelize)
