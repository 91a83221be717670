"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator


DEFAULT_PORT = 3007
# 健康检查与日志中使用的固定服务名（不随 PROJECT_NAME 变化）
SERVICE_NAME = "greeter-service"


class GrpcSettings(BaseModel):
    enabled: bool = False
    host: str = "0.0.0.0"
    port: int = 50051
    # This maps to GRPC option grpc.max_concurrent_streams
    max_concurrent_streams: int = 100


class CorsSettings(BaseModel):
    allow_origin: str = "*"
    allow_methods: list[str] = Field(default_factory=lambda: ["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    allow_headers: list[str] = Field(
        default_factory=lambda: ["Content-Type", "Connect-Protocol-Version", "Connect-Timeout-Ms"]
    )
    expose_headers: list[str] = Field(default_factory=lambda: ["Connect-Protocol-Version"])


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = "greeter-service"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # HTTP 监听配置（PORT 为空时回退到默认端口）
    HOST: str = "0.0.0.0"
    PORT: int = DEFAULT_PORT

    cors: CorsSettings = Field(default_factory=CorsSettings)

    # gRPC settings
    grpc: GrpcSettings = Field(default_factory=GrpcSettings)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    @field_validator("PORT", mode="before")
    @classmethod
    def _default_port_when_empty(cls, v):
        """PORT 未设置或为空字符串时使用默认端口。"""
        if v is None:
            return DEFAULT_PORT
        if isinstance(v, str) and not v.strip():
            return DEFAULT_PORT
        return v


settings = Settings()
