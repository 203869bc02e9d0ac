"""
Pytest configuration and fixtures for dense_layer tests
"""
import pytest
import numpy as np

from dense_layer import Backend, FullyConnectedLayer


@pytest.fixture
def cpu():
    """CPU device in float64 so gradient checks are not limited by float32"""
    return Backend(use_gpu=False, default_float=np.float64)


@pytest.fixture
def cpu32():
    return Backend(use_gpu=False, default_float=np.float32)


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def make_layer(cpu, rng):
    """Factory for layers on the float64 CPU device"""
    def _make(in_features=5, out_features=3, **kwargs):
        kwargs.setdefault("device", cpu)
        kwargs.setdefault("rng", rng)
        return FullyConnectedLayer(in_features, out_features, **kwargs)
    return _make


@pytest.fixture
def scenario_layer(make_layer):
    """in=3, out=2, W=[[1,0,1],[0,1,1]], b=[0,1]"""
    layer = make_layer(3, 2)
    W, b = layer.parameters()
    W.data = [[1, 0, 1], [0, 1, 1]]
    b.data = [0, 1]
    return layer
