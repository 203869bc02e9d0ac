# dense_layer/layers/FullyConnectedLayer.py
import threading

import numpy as np

from .Layer import Layer, Shape3d
from .Parameter import ParameterType
from ..core.Engine import Engine
from ..core.FullyConnectedGradOp import FullyConnectedGradOp
from ..core.FullyConnectedOp import FullyConnectedOp
from ..core.OpKernel import OpKernelConstruction, OpKernelContext
from ..core.Params import FullyParams
from ..errors import MovedFromError, UnsupportedEngineError
from ..helpers import config

# engine -> (forward kernel, backward kernel)
KERNELS = {
    Engine.INTERNAL: (FullyConnectedOp, FullyConnectedGradOp),
    Engine.AVX: (FullyConnectedOp, FullyConnectedGradOp),
    Engine.NNPACK: (FullyConnectedOp, FullyConnectedGradOp),
}


class FullyConnectedLayerParams:
    def __init__(self, bias=True, parallelize=None, backend_type=None):
        self.bias = bias
        self.parallelize = parallelize
        self.backend_type = backend_type


class FullyConnectedLayer(Layer):
    """
    Fully-connected (affine) layer: y = W x + b.

    weights: (out_features, in_features)
    bias:    (out_features,)

    Tensors are batch-major: x (batch, in_features), y (batch, out_features).
    Parameter gradients accumulate across backward calls until zero_grad().
    """
    def __init__(
        self,
        in_features,
        out_features,
        bias=True,
        backend_type=None,
        parallelize=None,
        device=None,
        rng=None,
    ):
        params = FullyParams(in_features, out_features, bias)
        super().__init__(backend_type=backend_type, parallelize=parallelize, device=device)
        self.add_parameter(ParameterType.WEIGHT, (out_features, in_features))
        if bias:
            self.add_parameter(ParameterType.BIAS, (out_features,))
        self._params = params
        self._moved = False
        # one forward and one backward context per calling thread
        self._contexts = threading.local()
        self._init_backend(self.engine())
        self.init_weight(rng)

    @classmethod
    def from_params(cls, in_features, out_features, params, **kwargs):
        return cls(
            in_features,
            out_features,
            bias=params.bias,
            backend_type=params.backend_type,
            parallelize=params.parallelize,
            **kwargs,
        )

    def init_weight(self, rng=None):
        """He-normal weights, zero bias."""
        self._check_alive()
        rng = np.random if rng is None else rng
        in_size, out_size = self._params.in_size, self._params.out_size
        self.parameter(ParameterType.WEIGHT).data = (
            rng.standard_normal((out_size, in_size)) * np.sqrt(2.0 / in_size)
        )
        if self._params.has_bias:
            self.parameter(ParameterType.BIAS).data = np.zeros(out_size)

    # -------- shape queries --------
    def fan_in_size(self):
        self._check_alive()
        return self._params.in_size

    def fan_out_size(self):
        self._check_alive()
        return self._params.out_size

    def in_shape(self):
        return [Shape3d(self.fan_in_size(), 1, 1)]

    def out_shape(self):
        return [Shape3d(self.fan_out_size(), 1, 1)]

    def has_bias(self):
        self._check_alive()
        return self._params.has_bias

    def layer_type(self):
        return "fully-connected"

    # -------- propagation (in place) --------
    def forward_propagation(self, in_data, out_data):
        self._check_alive()
        ctx = self._op_context("fwd")
        ctx.set_in_out(in_data, out_data)
        ctx.set_parallelize(self.parallelize())
        ctx.set_engine(self.engine())
        ctx.set_parameters(self.parameters())

        try:
            self._kernel_fwd.compute(ctx)
        finally:
            ctx.clear()

    def back_propagation(self, in_data, out_data, out_grad, in_grad):
        self._check_alive()
        ctx = self._op_context("bwd")
        ctx.set_in_out(in_data, out_data, out_grad, in_grad)
        ctx.set_parallelize(self.parallelize())
        ctx.set_engine(self.engine())
        ctx.set_parameters(self.parameters())

        try:
            self._kernel_back.compute(ctx)
        finally:
            ctx.clear()

    # -------- propagation (allocating) --------
    def forward(self, x):
        # x shape: (batch, in_features) or (in_features,)
        # return: (batch, out_features) or (out_features,)
        x, single = self._as_batch(x)
        y = self._device.empty((x.shape[0], self.fan_out_size()), dtype=x.dtype)
        self.forward_propagation([x], [y])
        return y[0] if single else y

    def backward(self, x, y, grad_out):
        """Return dL/dx and add dL/dW, dL/db into the parameter gradients."""
        x, single = self._as_batch(x)
        grad_out, _ = self._as_batch(grad_out)
        grad_in = self._device.empty(x.shape, dtype=x.dtype)
        out_data = [] if y is None else [self._as_batch(y)[0]]
        self.back_propagation([x], out_data, [grad_out], [grad_in])
        return grad_in[0] if single else grad_in

    # -------- backend selection --------
    def set_backend_type(self, backend_type):
        self._check_alive()
        engine = Engine.parse(backend_type)
        self._init_backend(engine)
        super().set_backend_type(engine)

    def move(self):
        """
        Hand this layer's parameters and settings to a new layer and return it.

        Kernels are rebuilt against the new owner; this layer is left
        moved-from and raises MovedFromError on any further use.
        """
        self._check_alive()
        other = object.__new__(type(self))
        other._device = self._device
        other._engine = self._engine
        other._parallelize = self._parallelize
        other._parameters = self._parameters
        other._params = self._params
        other._moved = False
        other._contexts = threading.local()
        other._init_backend(other.engine())

        self._parameters = []
        self._params = None
        self._kernel_fwd = None
        self._kernel_back = None
        self._contexts = threading.local()
        self._moved = True
        return other

    def is_moved_from(self):
        return self._moved

    # ================== helpers ==================
    def _init_backend(self, engine):
        if engine not in KERNELS:
            raise UnsupportedEngineError(engine)
        fwd_cls, back_cls = KERNELS[engine]
        ctx = OpKernelConstruction(self._device, self._params)
        self._kernel_fwd = fwd_cls(ctx)
        self._kernel_back = back_cls(ctx)
        if config.VERBOSE:
            print(f"[{self.layer_type()}] engine={engine} device={self._device.name}")

    def _op_context(self, name):
        ctx = getattr(self._contexts, name, None)
        if ctx is None:
            ctx = OpKernelContext()
            setattr(self._contexts, name, ctx)
        return ctx

    def _as_batch(self, x):
        x = self._device.astype_default(x)
        if x.ndim == 1:
            return x.reshape(1, -1), True
        return x, False

    def _check_alive(self):
        if self._moved:
            raise MovedFromError()

    def __repr__(self):
        if self._moved:
            return "FullyConnectedLayer(<moved-from>)"
        return (
            f"FullyConnectedLayer(in_features={self._params.in_size}, "
            f"out_features={self._params.out_size}, bias={self._params.has_bias}, "
            f"engine={self._engine})"
        )
