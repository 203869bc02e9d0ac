# dense_layer/core/OpKernel.py
"""
Kernel contract shared by every numeric backend.

A kernel is built once from an `OpKernelConstruction` (the device it runs on
and the layer params it is bound to) and afterwards only ever sees an
`OpKernelContext`, refreshed by the owning layer right before each call.
"""


class OpKernelConstruction:
    def __init__(self, device, params):
        self.device = device
        self.params = params


class OpKernelContext:
    """
    Per-call bindings handed to a kernel.

    The context only references tensors; it never owns or copies them. For a
    forward call `out_grad` and `in_grad` stay empty.
    """
    def __init__(self):
        self.in_data = []
        self.out_data = []
        self.out_grad = []
        self.in_grad = []
        self.parallelize = True
        self.engine = None
        self.parameters = []

    def set_in_out(self, in_data, out_data, out_grad=None, in_grad=None):
        self.in_data = list(in_data)
        self.out_data = list(out_data)
        self.out_grad = list(out_grad) if out_grad is not None else []
        self.in_grad = list(in_grad) if in_grad is not None else []

    def set_parallelize(self, parallelize):
        self.parallelize = bool(parallelize)

    def set_engine(self, engine):
        self.engine = engine

    def set_parameters(self, parameters):
        self.parameters = list(parameters)

    def input(self, index):
        return self.in_data[index]

    def output(self, index):
        return self.out_data[index]

    def output_grad(self, index):
        return self.out_grad[index]

    def input_grad(self, index):
        return self.in_grad[index]

    def clear(self):
        """Drop every tensor reference so the context does not keep batches alive."""
        self.set_in_out([], [])
        self.parameters = []


class OpKernel:
    def __init__(self, context):
        self.device = context.device
        self.params = context.params

    def compute(self, context):
        raise NotImplementedError
