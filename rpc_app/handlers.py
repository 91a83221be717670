from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Sequence, Tuple

from rpc_app.chain import Interceptor, compose
from rpc_app.contract import (
    GREETER_SERVICE_PATH,
    SAY_HELLO_PROCEDURE,
    SayHelloRequest,
    SayHelloResponse,
)
from rpc_app.interceptors import LoggingInterceptor, RecoveryInterceptor
from rpc_app.services.greeter_service import GreeterService
from rpc_app.types import Spec, UnaryFunc, UnaryRequest


@dataclass(frozen=True)
class ProcedureHandler:
    """A procedure bound to its composed call and its contract types."""

    spec: Spec
    request_type: Any
    response_type: Any
    call: UnaryFunc

    async def __call__(self, request: UnaryRequest) -> Any:
        return await self.call(request)


def default_interceptors() -> Tuple[Interceptor, ...]:
    # Recovery outermost: a fault anywhere below it, logging included, is contained
    return (
        RecoveryInterceptor(),
        LoggingInterceptor(),
    )


def new_greeter_service_handler(
    service: GreeterService,
    interceptors: Sequence[Interceptor] = (),
) -> Tuple[str, Dict[str, ProcedureHandler]]:
    """Build the procedure table for hello.v1.GreeterService.

    Returns the service path prefix and a mapping of full procedure path to
    handler. Interceptors are composed once, here.
    """
    say_hello = ProcedureHandler(
        spec=Spec(procedure=SAY_HELLO_PROCEDURE),
        request_type=SayHelloRequest,
        response_type=SayHelloResponse,
        call=compose(interceptors, service.say_hello),
    )
    return GREETER_SERVICE_PATH, {say_hello.spec.procedure: say_hello}
