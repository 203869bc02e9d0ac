from .Layer import Layer, Shape3d
from .Parameter import Parameter, ParameterType
from .FullyConnectedLayer import FullyConnectedLayer, FullyConnectedLayerParams

__all__ = [
    "Layer",
    "Shape3d",
    "Parameter",
    "ParameterType",
    "FullyConnectedLayer",
    "FullyConnectedLayerParams",
]
