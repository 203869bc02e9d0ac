# dense_layer/helpers/Backend.py
import numpy as np

from . import config

try:
    import cupy as cp
    # Quick runtime check
    try:
        _ = (cp.array([1, 2, 3]) + 1).sum()
        CUPY_AVAILABLE = True
        if config.VERBOSE:
            print("CuPy is available - GPU device enabled")
    except Exception as e:
        print(f"CuPy installed but CUDA runtime error: {e}")
        print("Falling back to CPU (NumPy)")
        cp = None
        CUPY_AVAILABLE = False
except ImportError:
    cp = None
    CUPY_AVAILABLE = False
    if config.VERBOSE:
        print("CuPy not available - using NumPy (CPU)")


class Backend:
    """Device handle: the array module layers allocate on and kernels compute with."""
    def __init__(self, use_gpu=True, default_float=np.float32, verbose=None):
        self.use_gpu = bool(use_gpu and CUPY_AVAILABLE)
        self.default_float = default_float
        self.verbose = config.VERBOSE if verbose is None else verbose
        self.xp = cp if self.use_gpu else np
        if self.verbose:
            print(f"Using {self.name} device")

    @property
    def name(self):
        return "GPU (CuPy)" if self.use_gpu else "CPU (NumPy)"

    def __repr__(self):
        return f"Backend({self.name}, default_float={np.dtype(self.default_float).name})"

    # -------- device transfer --------
    def to_cpu(self, x):
        """Move array to CPU (NumPy)."""
        if self.use_gpu and x is not None and not isinstance(x, np.ndarray):
            return cp.asnumpy(x)
        return x

    def ensure_array(self, x, dtype=None, copy=False):
        """
        Ensure 'x' is an array of the current backend.
        Accepts list/tuple/np/cp arrays; returns xp.ndarray.
        """
        if isinstance(x, self.xp.ndarray):
            if dtype is not None and x.dtype != dtype:
                return x.astype(dtype, copy=copy)
            return x
        # the other backend's array
        if self.use_gpu and isinstance(x, np.ndarray):
            arr = cp.asarray(x)
            return arr.astype(dtype, copy=copy) if dtype is not None else arr
        if (not self.use_gpu) and (cp is not None) and isinstance(x, cp.ndarray):
            arr = cp.asnumpy(x)
            return arr.astype(dtype, copy=copy) if dtype is not None else arr
        arr = self.xp.asarray(x)
        if dtype is not None and arr.dtype != dtype:
            arr = arr.astype(dtype, copy=False)
        return arr

    def astype_default(self, x):
        """Cast to default float dtype if needed."""
        if hasattr(x, "dtype") and x.dtype == self.default_float:
            return x
        return self.ensure_array(x, dtype=self.default_float)

    # -------- array creation --------
    def zeros(self, *args, **kwargs):
        kwargs.setdefault("dtype", self.default_float)
        return self.xp.zeros(*args, **kwargs)

    def empty(self, *args, **kwargs):
        kwargs.setdefault("dtype", self.default_float)
        return self.xp.empty(*args, **kwargs)

    # -------- math (thin wrappers) --------
    def sum(self, x, axis=None, keepdims=False):
        return self.xp.sum(x, axis=axis, keepdims=keepdims)

    # -------- delegate unknown attrs to xp --------
    def __getattr__(self, name):
        if name == "xp":
            raise AttributeError(name)
        return getattr(self.xp, name)


# Global backend instance - can be overridden
backend = Backend(use_gpu=config.USE_GPU)
