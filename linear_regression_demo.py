import numpy as np

from dense_layer import Backend, FullyConnectedLayer
from dense_layer.helpers.logger import RunLogger
from dense_layer.loss import MSELoss
from dense_layer.optimizer import SGDOptimizer


def generate_linear_data(n_samples, n_input, n_output, noise=0.01, seed=0):
    rng = np.random.default_rng(seed)
    W = rng.standard_normal((n_output, n_input))
    b = rng.standard_normal(n_output)
    X = rng.standard_normal((n_samples, n_input))
    Y = X @ W.T + b + noise * rng.standard_normal((n_samples, n_output))
    return X, Y, W, b


def fit(engine, n_input, n_output, lr, epochs, batch_size=32, tag="linear", runs_root="runs"):
    X, Y, W_true, b_true = generate_linear_data(512, n_input, n_output)

    device = Backend(use_gpu=False, default_float=np.float64)
    layer = FullyConnectedLayer(n_input, n_output, backend_type=engine, device=device)
    loss_fn = MSELoss(device=device)
    optimizer = SGDOptimizer(layer.parameter_pairs(), lr=lr)
    logger = RunLogger(root=runs_root, tag=f"{tag}_{engine}")

    history = {"loss": []}
    for epoch in range(1, epochs + 1):
        epoch_loss = 0.0
        for start in range(0, X.shape[0], batch_size):
            xb = X[start:start + batch_size]
            yb = Y[start:start + batch_size]

            optimizer.zero_grad()
            pred = layer.forward(xb)
            epoch_loss += loss_fn.forward(pred, yb) * xb.shape[0]
            layer.backward(xb, pred, loss_fn.backward())
            optimizer.step()

        epoch_loss /= X.shape[0]
        history["loss"].append(epoch_loss)
        logger.log_epoch(epoch, loss=epoch_loss)
        if epoch % max(1, epochs // 10) == 0:
            print(f"[{engine}] Epoch {epoch}, Loss: {epoch_loss:.6f}")

    logger.save_checkpoint(layer)
    logger.save_json()
    logger.plot_loss(history, tag=f"{tag}_{engine}")

    W, b = layer.params()
    print(f"[{engine}] max |W - W_true|: {np.max(np.abs(W - W_true)):.4f}")
    print(f"[{engine}] max |b - b_true|: {np.max(np.abs(b - b_true)):.4f}")
    return layer, history


if __name__ == "__main__":
    np.random.seed(0)

    fit("internal", n_input=4, n_output=2, lr=0.05, epochs=50)
    fit("avx", n_input=16, n_output=8, lr=0.05, epochs=50)
