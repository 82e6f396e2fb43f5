"""
配置文件 - 项目配置管理
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class GrpcTlsSettings(BaseModel):
    enabled: bool = False
    cert: Optional[str] = None
    key: Optional[str] = None
    ca: Optional[str] = None


class GrpcSettings(BaseModel):
    # Also start the gRPC server inside the REST process (shared store)
    enabled: bool = False
    host: str = "0.0.0.0"
    port: int = 50051
    # This maps to GRPC option grpc.max_concurrent_streams
    max_concurrent_streams: int = 100
    reflection: bool = True
    tls: GrpcTlsSettings = Field(default_factory=GrpcTlsSettings)


class Settings(BaseSettings):
    """项目配置"""

    # 基础配置
    PROJECT_NAME: str = Field(default="Catalog Forge")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=True)
    ENVIRONMENT: str = Field(default="development")

    # REST
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    API_PREFIX: str = Field(default="/api/v1")
    # Swagger UI 仅在 development 环境开放
    DOCS_URL: str = Field(default="/api-docs")

    # CORS配置
    CORS_ORIGINS: list = Field(default=["*"])

    # gRPC settings
    grpc: GrpcSettings = Field(default_factory=GrpcSettings)

    # 日志配置：LOG_LEVEL 为空时按 DEBUG 推导；LOG_JSON 为空时非 DEBUG 环境输出 JSON
    LOG_LEVEL: Optional[str] = Field(default=None)
    LOG_JSON: Optional[bool] = Field(default=None)
    # 请求体记录配置
    LOG_REQUEST_BODY_ENABLE_BY_DEFAULT: bool = Field(default=True)
    LOG_REQUEST_BODY_MAX_BYTES: int = Field(default=2048)

    # pydantic-settings v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow",
        env_nested_delimiter="__",
    )

    @property
    def docs_enabled(self) -> bool:
        return self.ENVIRONMENT.lower() == "development"

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def _parse_cors_origins(cls, v):
        """允许 JSON 字符串或逗号分隔字符串两种格式。"""
        if isinstance(v, list):
            return v
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("[") and s.endswith("]"):
                import json
                try:
                    arr = json.loads(s)
                    if isinstance(arr, list):
                        return arr
                except ValueError:
                    pass
            if "," in s:
                return [item.strip() for item in s.split(",") if item.strip()]
            return [s]
        return v


settings = Settings()
