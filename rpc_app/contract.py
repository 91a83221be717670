"""Typed message classes generated from `protos/hello/v1/hello.proto`.

`grpc.protos_and_services` runs protoc (from grpcio-tools) on first import,
so no generated `_pb2` files are checked in.
"""
from __future__ import annotations

import grpc


PROTO_PATH = "rpc_app/protos/hello/v1/hello.proto"

hello_pb2, hello_pb2_grpc = grpc.protos_and_services(PROTO_PATH)

SayHelloRequest = hello_pb2.SayHelloRequest
SayHelloResponse = hello_pb2.SayHelloResponse

GREETER_SERVICE_NAME = hello_pb2.DESCRIPTOR.services_by_name["GreeterService"].full_name
GREETER_SERVICE_PATH = f"/{GREETER_SERVICE_NAME}/"
SAY_HELLO_PROCEDURE = f"{GREETER_SERVICE_PATH}SayHello"
