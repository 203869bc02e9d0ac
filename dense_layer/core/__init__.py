from .Engine import Engine, default_engine
from .Params import FullyParams
from .OpKernel import OpKernel, OpKernelConstruction, OpKernelContext
from .FullyConnectedOp import FullyConnectedOp
from .FullyConnectedGradOp import FullyConnectedGradOp

__all__ = [
    "Engine",
    "default_engine",
    "FullyParams",
    "OpKernel",
    "OpKernelConstruction",
    "OpKernelContext",
    "FullyConnectedOp",
    "FullyConnectedGradOp",
]
