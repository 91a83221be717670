from .logging import LoggingInterceptor
from .recovery import RecoveryInterceptor, INTERNAL_ERROR_MESSAGE

__all__ = [
    "LoggingInterceptor",
    "RecoveryInterceptor",
    "INTERNAL_ERROR_MESSAGE",
]
