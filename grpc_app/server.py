from __future__ import annotations

from typing import Dict, Mapping, Optional, Sequence

import grpc
from grpc_health.v1 import health, health_pb2, health_pb2_grpc

from core.config import settings
from core.logging_config import get_logger
from rpc_app.chain import Interceptor
from rpc_app.errors import RpcError
from rpc_app.handlers import ProcedureHandler, default_interceptors, new_greeter_service_handler
from rpc_app.services.greeter_service import GreeterService
from rpc_app.types import UnaryRequest


logger = get_logger(__name__)


def _unary_unary_handler(handler: ProcedureHandler) -> grpc.RpcMethodHandler:
    async def _unary_unary(request, context: grpc.aio.ServicerContext):
        unary = UnaryRequest(
            spec=handler.spec,
            message=request,
            headers=dict(context.invocation_metadata() or ()),
            peer=context.peer(),
            timeout=context.time_remaining(),
        )
        try:
            return await handler(unary)
        except RpcError as exc:
            await context.abort(exc.code.grpc_status, exc.message)

    return grpc.unary_unary_rpc_method_handler(
        _unary_unary,
        request_deserializer=handler.request_type.FromString,
        response_serializer=handler.response_type.SerializeToString,
    )


def build_generic_handlers(handlers: Mapping[str, ProcedureHandler]) -> list[grpc.GenericRpcHandler]:
    """Group the procedure table by service into grpc generic handlers."""
    by_service: Dict[str, Dict[str, grpc.RpcMethodHandler]] = {}
    for handler in handlers.values():
        by_service.setdefault(handler.spec.service, {})[handler.spec.method] = _unary_unary_handler(handler)
    return [grpc.method_handlers_generic_handler(service, methods) for service, methods in by_service.items()]


async def create_server(
    service: Optional[GreeterService] = None,
    interceptors: Optional[Sequence[Interceptor]] = None,
    address: Optional[str] = None,
) -> tuple[grpc.aio.Server, int]:
    """Build the grpc.aio server and bind it; returns the server and bound port."""
    service = service if service is not None else GreeterService()
    if interceptors is None:
        interceptors = default_interceptors()
    _, handlers = new_greeter_service_handler(service, interceptors)

    options = [
        ("grpc.max_concurrent_streams", max(1, settings.grpc.max_concurrent_streams)),
    ]
    server = grpc.aio.server(options=options)
    server.add_generic_rpc_handlers(tuple(build_generic_handlers(handlers)))

    # Health service
    health_svc = health.aio.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)
    await health_svc.set("", health_pb2.HealthCheckResponse.SERVING)
    for handler in handlers.values():
        await health_svc.set(handler.spec.service, health_pb2.HealthCheckResponse.SERVING)

    # Bind address
    address = address or f"{settings.grpc.host}:{settings.grpc.port}"
    port = server.add_insecure_port(address)
    if port == 0:
        raise RuntimeError(f"gRPC server failed to bind {address}")
    return server, port
