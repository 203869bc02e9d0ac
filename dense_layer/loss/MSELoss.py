from ..helpers.Backend import backend as default_backend


class MSELoss:
    def __init__(self, device=None):
        self.device = device if device is not None else default_backend
        # cache from forward
        self.diff = None
        self.m = None

    def forward(self, pred, target):
        """
        pred: (batch, features)
        target: (batch, features)
        returns: loss scalar, 0.5 * sum((pred - target)^2) / batch
        """
        pred = self.device.ensure_array(pred)
        target = self.device.ensure_array(target)
        if pred.shape != target.shape:
            raise ValueError(f"pred shape {pred.shape} != target shape {target.shape}")

        self.m = pred.shape[0] if pred.ndim > 1 else 1
        self.diff = pred - target
        loss = 0.5 * self.device.sum(self.diff * self.diff) / self.m

        return float(self.device.to_cpu(loss))

    def backward(self):
        """dL/dpred = (pred - target)/m"""
        if self.diff is None or self.m is None:
            raise ValueError("Must call forward() before backward()")
        return self.diff / self.m
