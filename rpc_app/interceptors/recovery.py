from __future__ import annotations

from core.logging_config import get_logger
from rpc_app.chain import Interceptor
from rpc_app.errors import RpcError
from rpc_app.types import UnaryFunc, UnaryRequest
from shared.codes import ErrorCode


logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "internal server error"


class RecoveryInterceptor(Interceptor):
    """Fault boundary around the rest of the chain.

    RpcError results pass through unchanged. Any other exception is logged
    with its traceback and replaced by an `internal` RpcError with a generic
    message, so fault details never reach the caller.
    """

    def wrap(self, next: UnaryFunc) -> UnaryFunc:  # noqa: A002
        async def _unary(request: UnaryRequest):
            try:
                return await next(request)
            except RpcError:
                raise
            except Exception as exc:
                logger.error(
                    "rpc_panic_recovered",
                    procedure=request.spec.procedure,
                    error=repr(exc),
                    exc_info=True,
                )
                raise RpcError(ErrorCode.INTERNAL, INTERNAL_ERROR_MESSAGE) from None

        return _unary
