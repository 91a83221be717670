"""
greeter-service HTTP 主入口（Connect 协议 + 健康检查 + CORS）
"""
import socket
import sys
from contextlib import asynccontextmanager
from typing import Optional, Sequence

import uvicorn
from fastapi import FastAPI

from api.middleware import AccessLogMiddleware, CORSHeadersMiddleware, RequestIDMiddleware
from api.routes import health
from api.routes.connect import build_connect_router
from core.config import settings
from core.logging_config import configure_logging, get_logger
from rpc_app.chain import Interceptor
from rpc_app.handlers import default_interceptors, new_greeter_service_handler
from rpc_app.services.greeter_service import GreeterService


# 初始化日志：在入口处显式配置，避免模块导入时的副作用
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    logger.info("application_started", service_path=app.state.service_path)
    yield
    # 关闭时输出运行统计（计数不持久化，重启归零）
    logger.info("application_shutdown", **app.state.greeter_service.app_service.stats())


def create_app(
    service: Optional[GreeterService] = None,
    interceptors: Optional[Sequence[Interceptor]] = None,
) -> FastAPI:
    """创建 FastAPI 应用；拦截器链在此一次性组装，运行期不可变。"""
    service = service if service is not None else GreeterService()
    if interceptors is None:
        interceptors = default_interceptors()
    path, handlers = new_greeter_service_handler(service, interceptors)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.greeter_service = service
    app.state.service_path = path

    app.include_router(health.router)
    app.include_router(build_connect_router(handlers))

    # 添加中间件（注意顺序：后添加的在外层）
    # 1. Request ID（为 RPC 日志提供 request_id）
    app.add_middleware(RequestIDMiddleware)
    # 2. 访问日志
    app.add_middleware(AccessLogMiddleware)
    # 3. CORS 最外层：OPTIONS 在任何路由/处理器之前短路
    app.add_middleware(
        CORSHeadersMiddleware,
        allow_origin=settings.cors.allow_origin,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
        expose_headers=settings.cors.expose_headers,
    )
    return app


app = create_app()


def bind_socket(host: str, port: int) -> socket.socket:
    """在启动 uvicorn 之前绑定监听端口，绑定失败抛出 OSError。"""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


def run() -> None:
    try:
        sock = bind_socket(settings.HOST, settings.PORT)
    except OSError as exc:
        logger.critical("server_bind_failed", host=settings.HOST, port=settings.PORT, error=str(exc))
        sys.exit(1)

    logger.info("greeter_service_starting", address=f"{settings.HOST}:{settings.PORT}")
    logger.info("service_path", path=app.state.service_path)
    logger.info("health_check", url=f"http://localhost:{settings.PORT}/health")

    server = uvicorn.Server(
        uvicorn.Config(
            app,
            log_config=None,
            log_level="debug" if settings.DEBUG else "info",
        )
    )
    server.run(sockets=[sock])


if __name__ == "__main__":
    run()
