"""Connect 协议（unary）路由：把 procedure table 暴露为 `POST /<service>/<method>`。

只实现 Connect unary 的 JSON / 二进制 protobuf 两种编码；帧格式、streaming、
GET 请求不在范围内。
"""
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from fastapi import APIRouter, Request
from fastapi.responses import Response
from google.protobuf import json_format
from google.protobuf.message import DecodeError

from core.logging_config import get_logger
from rpc_app.errors import RpcError
from rpc_app.handlers import ProcedureHandler
from rpc_app.types import UnaryRequest
from shared.codes import ErrorCode


logger = get_logger(__name__)

JSON_CONTENT_TYPE = "application/json"
PROTO_CONTENT_TYPE = "application/proto"
SUPPORTED_CONTENT_TYPES = (JSON_CONTENT_TYPE, PROTO_CONTENT_TYPE)

PROTOCOL_VERSION_HEADER = "Connect-Protocol-Version"
TIMEOUT_HEADER = "Connect-Timeout-Ms"


def _media_type(content_type: Optional[str]) -> str:
    return (content_type or "").split(";", 1)[0].strip().lower()


def check_protocol_version(value: Optional[str]) -> None:
    """未携带版本头时放行；携带时必须为 1。"""
    if value is not None and value.strip() != "1":
        raise RpcError(ErrorCode.INVALID_ARGUMENT, f"protocol error: unsupported connect version {value!r}")


def parse_timeout(value: Optional[str]) -> Optional[float]:
    """`Connect-Timeout-Ms` -> 秒；缺省返回 None。"""
    if value is None or value == "":
        return None
    raw = value.strip()
    if not (raw.isascii() and raw.isdigit()) or len(raw) > 10:
        raise RpcError(ErrorCode.INVALID_ARGUMENT, f"protocol error: invalid timeout {value!r}")
    return int(raw) / 1000


def decode_message(media_type: str, body: bytes, message_type: Any) -> Any:
    if media_type == PROTO_CONTENT_TYPE:
        try:
            return message_type.FromString(body)
        except DecodeError as exc:
            raise RpcError(ErrorCode.INVALID_ARGUMENT, f"unmarshal into {message_type.DESCRIPTOR.full_name}: {exc}") from None
    if not body:
        raise RpcError(ErrorCode.INVALID_ARGUMENT, "zero-length payload is not a valid JSON object")
    try:
        obj = json.loads(body.decode("utf-8"))
    except (ValueError, UnicodeDecodeError) as exc:
        raise RpcError(ErrorCode.INVALID_ARGUMENT, f"unmarshal into {message_type.DESCRIPTOR.full_name}: {exc}") from None
    if not isinstance(obj, dict):
        raise RpcError(
            ErrorCode.INVALID_ARGUMENT,
            f"unmarshal into {message_type.DESCRIPTOR.full_name}: expected JSON object, got {type(obj).__name__}",
        )
    try:
        return json_format.ParseDict(obj, message_type(), ignore_unknown_fields=True)
    except json_format.ParseError as exc:
        raise RpcError(ErrorCode.INVALID_ARGUMENT, f"unmarshal into {message_type.DESCRIPTOR.full_name}: {exc}") from None


def encode_message(media_type: str, message: Any) -> bytes:
    if media_type == PROTO_CONTENT_TYPE:
        return message.SerializeToString()
    return json.dumps(json_format.MessageToDict(message), ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def error_response(exc: RpcError) -> Response:
    return Response(
        content=json.dumps(exc.to_dict(), ensure_ascii=False, separators=(",", ":")),
        status_code=exc.code.http_status,
        media_type=JSON_CONTENT_TYPE,
    )


def _make_endpoint(handler: ProcedureHandler):
    async def endpoint(request: Request) -> Response:
        media_type = _media_type(request.headers.get("content-type"))
        if media_type not in SUPPORTED_CONTENT_TYPES:
            return Response(
                status_code=415,
                headers={"Accept-Post": ", ".join(SUPPORTED_CONTENT_TYPES)},
            )

        body = await request.body()
        try:
            check_protocol_version(request.headers.get(PROTOCOL_VERSION_HEADER))
            timeout = parse_timeout(request.headers.get(TIMEOUT_HEADER))
            message = decode_message(media_type, body, handler.request_type)
        except RpcError as exc:
            logger.warning(
                "connect_bad_request",
                procedure=handler.spec.procedure,
                code=exc.code.value,
                message=exc.message,
            )
            return error_response(exc)

        unary = UnaryRequest(
            spec=handler.spec,
            message=message,
            headers=dict(request.headers),
            peer=request.client.host if request.client else None,
            timeout=timeout,
        )
        try:
            reply = await handler(unary)
        except RpcError as exc:
            return error_response(exc)
        return Response(content=encode_message(media_type, reply), media_type=media_type)

    endpoint.__name__ = handler.spec.method
    return endpoint


def build_connect_router(handlers: Mapping[str, ProcedureHandler]) -> APIRouter:
    """为 procedure table 中的每个 procedure 注册一个 POST 路由。"""
    router = APIRouter(tags=["Connect"])
    for procedure, handler in handlers.items():
        router.add_api_route(
            procedure,
            _make_endpoint(handler),
            methods=["POST"],
            include_in_schema=False,
        )
    return router
