"""健康检查路由"""
from fastapi import APIRouter
from fastapi.responses import JSONResponse

from core.config import SERVICE_NAME


router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> JSONResponse:
    """存活探针：固定返回 {"status":"ok","service":"greeter-service"}，与请求历史无关"""
    return JSONResponse({"status": "ok", "service": SERVICE_NAME})
