"""Native gRPC transport for the greeter service.

Serves the same procedure table as the Connect HTTP front door; the
interceptor chain is composed in `rpc_app.handlers`, not by grpc.aio.
"""
