from .SGDOptimizer import SGDOptimizer

__all__ = ["SGDOptimizer"]
