from __future__ import annotations

from typing import Optional

from application.services.greeter_service import GreeterApplicationService
from rpc_app.contract import SayHelloRequest, SayHelloResponse
from rpc_app.types import UnaryRequest


class GreeterService:
    """hello.v1.GreeterService implementation; maps contract messages to the application service."""

    def __init__(self, app_service: Optional[GreeterApplicationService] = None) -> None:
        self._svc = app_service if app_service is not None else GreeterApplicationService()

    @property
    def app_service(self) -> GreeterApplicationService:
        return self._svc

    async def say_hello(self, request: UnaryRequest) -> SayHelloResponse:
        msg: SayHelloRequest = request.message
        return SayHelloResponse(message=self._svc.greet(msg.name))
