"""
dense_layer - a trainable fully-connected layer over pluggable numeric engines.

- layers: FullyConnectedLayer and the Layer/Parameter base
- core: engines, kernel contract, forward/backward kernels
- helpers: NumPy/CuPy device backend, configuration, run logger
- optimizer, loss: SGD and MSE for training loops
"""
from .errors import (
    NNError,
    UnsupportedEngineError,
    ShapeMismatchError,
    InvalidConfigurationError,
    MovedFromError,
)
from .core import Engine, default_engine
from .helpers import Backend, backend
from .layers import (
    FullyConnectedLayer,
    FullyConnectedLayerParams,
    Layer,
    Parameter,
    ParameterType,
    Shape3d,
)

__all__ = [
    "NNError",
    "UnsupportedEngineError",
    "ShapeMismatchError",
    "InvalidConfigurationError",
    "MovedFromError",
    "Engine",
    "default_engine",
    "Backend",
    "backend",
    "FullyConnectedLayer",
    "FullyConnectedLayerParams",
    "Layer",
    "Parameter",
    "ParameterType",
    "Shape3d",
]

__version__ = "0.1.0"
