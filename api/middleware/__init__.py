from .request_id import RequestIDMiddleware
from .logging import AccessLogMiddleware
from .cors import CORSHeadersMiddleware

__all__ = [
    "RequestIDMiddleware",
    "AccessLogMiddleware",
    "CORSHeadersMiddleware",
]
