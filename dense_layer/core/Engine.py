# dense_layer/core/Engine.py
from enum import Enum

from ..errors import UnsupportedEngineError
from ..helpers import config


class Engine(Enum):
    """Numeric backend families a layer can be asked to run on."""
    INTERNAL = "internal"
    NNPACK = "nnpack"
    LIBDNN = "libdnn"
    AVX = "avx"
    OPENCL = "opencl"
    CBLAS = "cblas"
    INTEL_MKL = "intel_mkl"

    @classmethod
    def parse(cls, value):
        """Accept an Engine or its (case-insensitive) name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedEngineError(value)

    def __str__(self):
        return self.value


def default_engine():
    return Engine.parse(config.DEFAULT_ENGINE)
