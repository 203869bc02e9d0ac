class SGDOptimizer:
    """
    SGD with optional momentum and L2 weight decay.

    Parameters are updated in place so layers and their kernels keep seeing
    the same arrays. Gradients are not cleared by step(); call zero_grad()
    between steps, since layers accumulate into them.
    """
    def __init__(self, params, lr=1e-2, weight_decay=0.0, momentum=0.0):
        self.params = params  # list of [p, g]
        self.lr = lr
        self.wd = weight_decay
        self.momentum = momentum
        # velocity keyed by param id
        self._v = {}

    @classmethod
    def for_layers(cls, layers, **kwargs):
        params = []
        for layer in layers:
            params.extend(layer.parameter_pairs())
        return cls(params, **kwargs)

    def step(self):
        for p, g in self.params:
            update = g + self.wd * p if self.wd != 0.0 else g
            if self.momentum != 0.0:
                pid = id(p)
                if pid not in self._v:
                    self._v[pid] = update.copy()
                else:
                    v = self._v[pid]
                    v *= self.momentum
                    v += update
                update = self._v[pid]
            p -= self.lr * update

    def zero_grad(self):
        for _, g in self.params:
            g[...] = 0.0
