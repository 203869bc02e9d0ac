# dense_layer/core/kernels.py
"""
Numeric bodies for the fully-connected kernels.

Tensors are batch-major 2-D arrays: x (batch, in_size), y and dy
(batch, out_size). W is (out_size, in_size), b is (out_size,).

The portable bodies compute one row (or one output unit) at a time with the
same function whether or not they run on the thread pool, so parallel and
sequential results are bit-identical. The vectorized bodies hand the whole
batch to the device's matmul.
"""
import threading
from concurrent.futures import ThreadPoolExecutor

from ..helpers import config

_executor = None
_executor_lock = threading.Lock()


def _get_executor():
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=config.NUM_THREADS, thread_name_prefix="dense_layer"
            )
        return _executor


def for_i(parallelize, n, fn):
    """Run fn(0..n-1), on the shared thread pool when parallelize is set."""
    if parallelize and n > 1:
        # list() re-raises the first worker exception here
        list(_get_executor().map(fn, range(n)))
    else:
        for i in range(n):
            fn(i)


# -------- portable (per-row) --------
def fully_connected_op_internal(x, W, b, y, has_bias, parallelize, xp):
    def row(i):
        r = xp.dot(W, x[i])
        if has_bias:
            r = r + b
        y[i, :] = r

    for_i(parallelize, x.shape[0], row)


def fully_connected_grad_op_internal(x, W, dW, db, dy, dx, has_bias, parallelize, xp):
    # dL/dx = W^T . dL/dy, rows are independent
    def prev_delta(i):
        dx[i, :] = xp.dot(dy[i], W)

    for_i(parallelize, x.shape[0], prev_delta)

    # dW[j] and db[j] only depend on output unit j; the batch is summed in order
    def accumulate(j):
        for i in range(x.shape[0]):
            dW[j, :] += dy[i, j] * x[i]
            if has_bias:
                db[j] += dy[i, j]

    for_i(parallelize, W.shape[0], accumulate)


# -------- vectorized (whole batch) --------
def fully_connected_op_vectorized(x, W, b, y, has_bias, xp):
    r = xp.matmul(x, W.T)
    if has_bias:
        r += b
    y[...] = r


def fully_connected_grad_op_vectorized(x, W, dW, db, dy, dx, has_bias, xp):
    dx[...] = xp.matmul(dy, W)
    dW += xp.matmul(dy.T, x)
    if has_bias:
        db += xp.sum(dy, axis=0)
