# dense_layer/errors.py


class NNError(Exception):
    """Base class for configuration and usage errors raised by dense_layer."""


class UnsupportedEngineError(NNError):
    def __init__(self, engine):
        name = getattr(engine, "value", engine)
        super().__init__(f"Not supported engine: {name}")
        self.engine = engine


class ShapeMismatchError(NNError, ValueError):
    pass


class InvalidConfigurationError(NNError, ValueError):
    pass


class MovedFromError(NNError, RuntimeError):
    def __init__(self):
        super().__init__("layer has been moved from and can no longer be used")
