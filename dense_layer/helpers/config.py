# dense_layer/helpers/config.py
import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name, default):
    value = os.environ.get(name)
    if not value:
        return default
    return int(value)


# engine picked when a layer is built without backend_type
DEFAULT_ENGINE = os.environ.get("DENSE_LAYER_ENGINE", "internal")

# allow the default device to use CuPy when it is installed
USE_GPU = _env_flag("DENSE_LAYER_USE_GPU", True)

VERBOSE = _env_flag("DENSE_LAYER_VERBOSE", False)

# worker count for row-parallel kernels (None lets the executor decide)
NUM_THREADS = _env_int("DENSE_LAYER_NUM_THREADS", None)
