"""RPC layer for the greeter service.

This package hosts:
- The protobuf contract (in `protos/`), compiled at import time by `contract`.
- The transport-neutral unary call model, interceptor chain and interceptors.
- Thin service adapters that map contract messages to application services.

Transports (Connect over HTTP in `api/`, native gRPC in `grpc_app/`) only
decode/encode messages and call the procedure table built in `handlers`.
"""
