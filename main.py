"""
FastAPI应用主入口

REST 与（可选的）进程内 gRPC 服务共享同一个内存存储。
"""
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.routes import user, product
from api.middleware import RequestIDMiddleware, LoggingMiddleware
from application.dto import HealthDTO
from application.services.user_service import UserApplicationService
from application.services.product_service import ProductApplicationService
from core.config import settings
from core.exceptions import register_exception_handlers
from core.logging_config import get_logger, configure_logging
from infrastructure.store import InMemoryStore
from shared.timestamps import utc_now


# 初始化日志：在入口处显式配置
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理：按配置在同一进程内启动 gRPC 服务"""
    grpc_server = None
    if settings.grpc.enabled:
        # 延迟导入：仅在启用 gRPC 时编译 proto
        from grpc_app.server import create_server

        grpc_server = await create_server(app.state.user_service, app.state.product_service)
        await grpc_server.start()
        logger.info("grpc_started", host=settings.grpc.host, port=settings.grpc.port)

    logger.info(
        "application_started",
        environment=settings.ENVIRONMENT,
        docs=settings.DOCS_URL if settings.docs_enabled else None,
    )
    yield

    if grpc_server is not None:
        await grpc_server.stop(grace=5)
        logger.info("grpc_stopped")
    logger.info("application_shutdown", message="Application shutdown")


def create_app(store: Optional[InMemoryStore] = None) -> FastAPI:
    """
    创建 FastAPI 应用

    Args:
        store: 内存存储；为空时新建一个（测试可传入独立实例）
    """
    store = store or InMemoryStore()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
        description="用户与商品目录服务（REST + gRPC）",
        # Swagger UI 仅在 development 环境开放
        docs_url=settings.DOCS_URL if settings.docs_enabled else None,
        openapi_url="/openapi.json" if settings.docs_enabled else None,
        redoc_url=None,
    )

    app.state.store = store
    app.state.user_service = UserApplicationService(store.users)
    app.state.product_service = ProductApplicationService(store.products)

    # 添加中间件（注意顺序：后添加的先执行）
    # 1. 日志中间件（依赖request_id）
    app.add_middleware(LoggingMiddleware)

    # 2. Request ID中间件（先于日志中间件执行，为其提供request_id）
    app.add_middleware(RequestIDMiddleware)

    # 3. CORS中间件
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册全局异常处理器
    register_exception_handlers(app)

    # 注册路由
    app.include_router(user.router, prefix=settings.API_PREFIX)
    app.include_router(product.router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["Health"], response_model=HealthDTO)
    async def health_check():
        """健康检查端点"""
        return HealthDTO(status="ok", timestamp=utc_now())

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
