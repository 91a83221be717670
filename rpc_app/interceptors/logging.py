from __future__ import annotations

import time

from core.logging_config import get_logger
from rpc_app.chain import Interceptor
from rpc_app.errors import RpcError
from rpc_app.types import UnaryFunc, UnaryRequest


logger = get_logger(__name__)


class LoggingInterceptor(Interceptor):
    def wrap(self, next: UnaryFunc) -> UnaryFunc:  # noqa: A002
        async def _unary(request: UnaryRequest):
            start = time.perf_counter()
            procedure = request.spec.procedure
            logger.info("rpc_started", procedure=procedure, peer=request.peer)
            status = "error"
            code = None
            try:
                resp = await next(request)
                status = "success"
                return resp
            except RpcError as exc:
                code = exc.code.value
                raise
            except Exception as exc:
                # Unrecovered fault below this stage; the recovery boundary decides what the caller sees
                code = type(exc).__name__
                raise
            finally:
                elapsed_ms = (time.perf_counter() - start) * 1000
                logger.info(
                    "rpc_completed",
                    procedure=procedure,
                    status=status,
                    code=code,
                    elapsed_ms=round(elapsed_ms, 2),
                )

        return _unary
