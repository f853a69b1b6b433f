from .correlation import CorrelationMiddleware
from .logging import LoggingMiddleware

__all__ = ["CorrelationMiddleware", "LoggingMiddleware"]
