import grpc
import pytest
from grpc_health.v1 import health_pb2, health_pb2_grpc

from grpc_app.server import create_server
from rpc_app.contract import SayHelloRequest, hello_pb2_grpc
from rpc_app.services.greeter_service import GreeterService


pytestmark = pytest.mark.asyncio


@pytest.fixture
async def grpc_target(greeter_service):
    """Start the real grpc.aio server on an ephemeral port."""
    server, port = await create_server(greeter_service, address="127.0.0.1:0")
    await server.start()
    try:
        yield f"127.0.0.1:{port}"
    finally:
        await server.stop(grace=None)


async def test_say_hello(grpc_target, service_state):
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = hello_pb2_grpc.GreeterServiceStub(channel)

        reply = await stub.SayHello(SayHelloRequest(name="Alice"))
        assert reply.message == "Hello, Alice!"

        reply = await stub.SayHello(SayHelloRequest())
        assert reply.message == "Hello, World!"

    assert service_state.requests_served == 2


async def test_health_serving(grpc_target):
    async with grpc.aio.insecure_channel(grpc_target) as channel:
        stub = health_pb2_grpc.HealthStub(channel)
        overall = await stub.Check(health_pb2.HealthCheckRequest(service=""))
        greeter = await stub.Check(health_pb2.HealthCheckRequest(service="hello.v1.GreeterService"))
    assert overall.status == health_pb2.HealthCheckResponse.SERVING
    assert greeter.status == health_pb2.HealthCheckResponse.SERVING


async def test_fault_maps_to_internal_status():
    class Faulty(GreeterService):
        async def say_hello(self, request):
            if request.message.name == "panic":
                raise KeyError("secret-internals")
            return await super().say_hello(request)

    server, port = await create_server(Faulty(), address="127.0.0.1:0")
    await server.start()
    try:
        async with grpc.aio.insecure_channel(f"127.0.0.1:{port}") as channel:
            stub = hello_pb2_grpc.GreeterServiceStub(channel)
            with pytest.raises(grpc.aio.AioRpcError) as ei:
                await stub.SayHello(SayHelloRequest(name="panic"))
            assert ei.value.code() == grpc.StatusCode.INTERNAL
            assert ei.value.details() == "internal server error"

            reply = await stub.SayHello(SayHelloRequest(name="Bob"))
            assert reply.message == "Hello, Bob!"
    finally:
        await server.stop(grace=None)
