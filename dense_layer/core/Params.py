# dense_layer/core/Params.py
from numbers import Integral

from ..errors import InvalidConfigurationError


class FullyParams:
    """Shape metadata of a fully-connected layer, shared by reference with its kernels."""
    def __init__(self, in_size, out_size, has_bias=True):
        for name, value in (("in_size", in_size), ("out_size", out_size)):
            if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
                raise InvalidConfigurationError(
                    f"{name} must be a positive integer, got {value!r}"
                )
        self._in_size = int(in_size)
        self._out_size = int(out_size)
        self._has_bias = bool(has_bias)

    # fixed for the lifetime of the layer
    @property
    def in_size(self):
        return self._in_size

    @property
    def out_size(self):
        return self._out_size

    @property
    def has_bias(self):
        return self._has_bias

    def __repr__(self):
        return (
            f"FullyParams(in_size={self.in_size}, out_size={self.out_size}, "
            f"has_bias={self.has_bias})"
        )
