# dense_layer/core/FullyConnectedGradOp.py
from .Engine import Engine
from .FullyConnectedOp import (
    VECTORIZED_ENGINES,
    bound_parameters,
    check_count,
    check_tensor,
)
from .OpKernel import OpKernel
from . import kernels
from ..errors import UnsupportedEngineError


class FullyConnectedGradOp(OpKernel):
    """
    Backward kernel.

    Writes dL/dx into in_grad[0] and adds the batch's contribution to the
    weight and bias gradient accumulators. Accumulators are never reset here;
    zeroing between optimizer steps is the caller's job.
    """

    def compute(self, context):
        params = self.params
        check_count("input", context.in_data)
        check_count("output gradient", context.out_grad)
        check_count("input gradient", context.in_grad)
        x = context.input(0)
        dy = context.output_grad(0)
        dx = context.input_grad(0)
        batch = check_tensor("input", x, params.in_size)
        check_tensor("output gradient", dy, params.out_size, batch)
        check_tensor("input gradient", dx, params.in_size, batch)
        weight, bias = bound_parameters(params, context.parameters)
        db = bias.grad if bias is not None else None

        xp = self.device.xp
        engine = context.engine
        if engine is Engine.INTERNAL:
            kernels.fully_connected_grad_op_internal(
                x, weight.data, weight.grad, db, dy, dx,
                params.has_bias, context.parallelize, xp,
            )
        elif engine in VECTORIZED_ENGINES:
            kernels.fully_connected_grad_op_vectorized(
                x, weight.data, weight.grad, db, dy, dx, params.has_bias, xp
            )
        else:
            raise UnsupportedEngineError(engine)
