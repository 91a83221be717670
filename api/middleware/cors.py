"""
CORS 中间件（纯 ASGI）

与 starlette 的 CORSMiddleware 不同：无论请求是否携带 Origin，所有 HTTP 响应
都附带固定的 CORS 头；任意 OPTIONS 请求在进入路由前直接返回 200 空响应。
"""
from typing import Iterable, List, Tuple

from starlette.datastructures import MutableHeaders
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send


class CORSHeadersMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        allow_origin: str = "*",
        allow_methods: Iterable[str] = ("GET", "POST", "PUT", "DELETE", "OPTIONS"),
        allow_headers: Iterable[str] = ("Content-Type", "Connect-Protocol-Version", "Connect-Timeout-Ms"),
        expose_headers: Iterable[str] = ("Connect-Protocol-Version",),
    ):
        self.app = app
        self.headers: List[Tuple[str, str]] = [
            ("Access-Control-Allow-Origin", allow_origin),
            ("Access-Control-Allow-Methods", ", ".join(allow_methods)),
            ("Access-Control-Allow-Headers", ", ".join(allow_headers)),
            ("Access-Control-Expose-Headers", ", ".join(expose_headers)),
        ]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # 预检请求短路：不进入路由/处理器
        if scope["method"] == "OPTIONS":
            response = Response(status_code=200, headers=dict(self.headers))
            await response(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                headers = MutableHeaders(scope=message)
                for key, value in self.headers:
                    headers[key] = value
            await send(message)

        await self.app(scope, receive, send_wrapper)
