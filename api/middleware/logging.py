"""
访问日志中间件（轻量级）
每个 HTTP 请求记录一行 access 日志：方法、路径、状态码、耗时
"""
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from core.logging_config import get_logger


logger = get_logger(__name__)


class AccessLogMiddleware:
    # 跳过日志的路径（探针请求频繁）
    SKIP_PATHS = {"/health"}

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] in self.SKIP_PATHS:
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(
                    "access",
                    method=scope["method"],
                    path=scope["path"],
                    status=message["status"],
                    duration_ms=round(duration_ms, 2),
                )
            await send(message)

        await self.app(scope, receive, send_wrapper)
