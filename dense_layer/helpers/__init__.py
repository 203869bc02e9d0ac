from .Backend import Backend, backend, CUPY_AVAILABLE

__all__ = ["Backend", "backend", "CUPY_AVAILABLE"]
