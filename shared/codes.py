"""
Shared RPC error codes used across layers (RPC core / Connect / gRPC).

This module provides a single source of truth so the Connect HTTP mapping and
the gRPC status mapping cannot drift apart.
"""
from enum import Enum

import grpc


class ErrorCode(str, Enum):
    """RPC 错误码定义（单一来源），取值与 Connect 协议的 code 字符串一致"""

    CANCELED = "canceled"
    UNKNOWN = "unknown"
    INVALID_ARGUMENT = "invalid_argument"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    FAILED_PRECONDITION = "failed_precondition"
    ABORTED = "aborted"
    OUT_OF_RANGE = "out_of_range"
    UNIMPLEMENTED = "unimplemented"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    DATA_LOSS = "data_loss"
    UNAUTHENTICATED = "unauthenticated"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @property
    def grpc_status(self) -> grpc.StatusCode:
        # grpc.StatusCode 成员名与本枚举成员名一一对应（CANCELED -> CANCELLED 除外）
        if self is ErrorCode.CANCELED:
            return grpc.StatusCode.CANCELLED
        return grpc.StatusCode[self.name]


# Connect protocol: error code -> HTTP status
_HTTP_STATUS = {
    ErrorCode.CANCELED: 499,
    ErrorCode.UNKNOWN: 500,
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.DEADLINE_EXCEEDED: 504,
    ErrorCode.NOT_FOUND: 404,
    ErrorCode.ALREADY_EXISTS: 409,
    ErrorCode.PERMISSION_DENIED: 403,
    ErrorCode.RESOURCE_EXHAUSTED: 429,
    ErrorCode.FAILED_PRECONDITION: 400,
    ErrorCode.ABORTED: 409,
    ErrorCode.OUT_OF_RANGE: 400,
    ErrorCode.UNIMPLEMENTED: 501,
    ErrorCode.INTERNAL: 500,
    ErrorCode.UNAVAILABLE: 503,
    ErrorCode.DATA_LOSS: 500,
    ErrorCode.UNAUTHENTICATED: 401,
}
