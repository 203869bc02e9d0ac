# dense_layer/core/FullyConnectedOp.py
from .Engine import Engine
from .OpKernel import OpKernel
from . import kernels
from ..errors import ShapeMismatchError, UnsupportedEngineError

VECTORIZED_ENGINES = (Engine.AVX, Engine.NNPACK)


def check_tensor(name, tensor, width, batch=None):
    """Validate a batch-major (batch, width) tensor; returns its batch size."""
    shape = tuple(getattr(tensor, "shape", ()))
    if len(shape) != 2:
        raise ShapeMismatchError(f"{name} must be a 2-D (batch, features) array, got shape {shape}")
    if shape[1] != width:
        raise ShapeMismatchError(f"{name} width {shape[1]} does not match expected {width}")
    if batch is not None and shape[0] != batch:
        raise ShapeMismatchError(f"{name} batch {shape[0]} does not match input batch {batch}")
    return shape[0]


def check_count(name, tensors, count=1):
    if len(tensors) != count:
        raise ShapeMismatchError(f"expected exactly {count} {name} tensor(s), got {len(tensors)}")


def bound_parameters(params, parameters):
    """Return (weight, bias-or-None) Parameter objects from a context's parameter list."""
    expected = 2 if params.has_bias else 1
    if len(parameters) != expected:
        raise ShapeMismatchError(f"expected {expected} bound parameter(s), got {len(parameters)}")
    weight = parameters[0]
    if tuple(weight.data.shape) != (params.out_size, params.in_size):
        raise ShapeMismatchError(
            f"weight shape {tuple(weight.data.shape)} does not match "
            f"{(params.out_size, params.in_size)}"
        )
    bias = None
    if params.has_bias:
        bias = parameters[1]
        if tuple(bias.data.shape) != (params.out_size,):
            raise ShapeMismatchError(
                f"bias shape {tuple(bias.data.shape)} does not match {(params.out_size,)}"
            )
    return weight, bias


class FullyConnectedOp(OpKernel):
    """Forward kernel: y = W x + b for every row of the batch."""

    def compute(self, context):
        params = self.params
        check_count("input", context.in_data)
        check_count("output", context.out_data)
        x = context.input(0)
        y = context.output(0)
        batch = check_tensor("input", x, params.in_size)
        check_tensor("output", y, params.out_size, batch)
        weight, bias = bound_parameters(params, context.parameters)
        b = bias.data if bias is not None else None

        xp = self.device.xp
        engine = context.engine
        if engine is Engine.INTERNAL:
            kernels.fully_connected_op_internal(
                x, weight.data, b, y, params.has_bias, context.parallelize, xp
            )
        elif engine in VECTORIZED_ENGINES:
            kernels.fully_connected_op_vectorized(
                x, weight.data, b, y, params.has_bias, xp
            )
        else:
            raise UnsupportedEngineError(engine)
