from __future__ import annotations

from shared.codes import ErrorCode


class RpcError(Exception):
    """Error result of a unary call.

    Raised by handlers and interceptors; transports map it to their wire form
    (Connect JSON error body, gRPC status).
    """

    def __init__(self, code: ErrorCode, message: str = "") -> None:
        self.code = code
        self.message = message
        super().__init__(f"{code.value}: {message}" if message else code.value)

    def to_dict(self) -> dict:
        body = {"code": self.code.value}
        if self.message:
            body["message"] = self.message
        return body
