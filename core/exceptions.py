"""
异常映射与全局异常处理器（REST）
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse
import traceback
from starlette import status as http_status

from .response import error_response
from .validation import format_rest_violations
from shared.codes import BusinessCode
from core.config import settings
from core.logging_config import get_logger, log_error_safely
from domain.common.exceptions import BusinessException


TRANSPORT = "rest"


def business_code_to_http_status(code: int) -> int:
    """根据业务码映射HTTP状态码（未知业务码按系统错误处理）。"""
    mapping = {
        BusinessCode.PARAM_VALIDATION_ERROR: http_status.HTTP_400_BAD_REQUEST,

        BusinessCode.USER_NOT_FOUND: http_status.HTTP_404_NOT_FOUND,
        BusinessCode.PRODUCT_NOT_FOUND: http_status.HTTP_404_NOT_FOUND,

        BusinessCode.SYSTEM_ERROR: http_status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    try:
        bc = BusinessCode(code)
    except ValueError:
        return http_status.HTTP_500_INTERNAL_SERVER_ERROR
    return mapping.get(bc, http_status.HTTP_500_INTERNAL_SERVER_ERROR)


def _operation(request: Request) -> str:
    """操作名：HTTP 方法 + 路由模板（未匹配路由时退回实际路径）"""
    route = request.scope.get("route")
    path = getattr(route, "path", None) or request.url.path
    return f"{request.method} {path}"


def _request_id(request: Request):
    return getattr(getattr(request, "state", object()), "request_id", None)


def register_exception_handlers(app: FastAPI):
    """
    注册全局异常处理器

    Args:
        app: FastAPI应用实例
    """

    logger = get_logger(__name__)

    @app.exception_handler(BusinessException)
    async def business_exception_handler(request: Request, exc: BusinessException):
        """处理业务异常（未找到 / 参数非法等）"""
        status_code = business_code_to_http_status(exc.code)
        log_error_safely(
            logger,
            "rest_mapped_error",
            transport=TRANSPORT,
            operation=_operation(request),
            code=int(exc.code),
            status=status_code,
            message=exc.message,
            request_id=_request_id(request),
        )
        return JSONResponse(
            status_code=status_code,
            content=error_response(exc.message, exc.details),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """处理参数验证异常：在进入路由函数前拒绝请求，列出全部违规项"""
        violations = format_rest_violations(exc.errors())
        message = ", ".join(v["message"] for v in violations) or "Validation error"
        log_error_safely(
            logger,
            "rest_mapped_error",
            transport=TRANSPORT,
            operation=_operation(request),
            code=int(BusinessCode.PARAM_VALIDATION_ERROR),
            status=http_status.HTTP_400_BAD_REQUEST,
            message=message,
            request_id=_request_id(request),
        )
        return JSONResponse(
            status_code=http_status.HTTP_400_BAD_REQUEST,
            content=error_response(message, violations),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """处理HTTP异常（未匹配路由、方法不允许等）"""
        message = "Endpoint not found" if exc.status_code == 404 else str(exc.detail)
        log_error_safely(
            logger,
            "rest_http_error",
            transport=TRANSPORT,
            operation=_operation(request),
            status=exc.status_code,
            message=message,
            request_id=_request_id(request),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """处理所有未捕获的异常，降级为 500"""
        details = None
        if settings.DEBUG:
            details = {
                "exception": str(exc),
                "traceback": traceback.format_exc(),
            }

        log_error_safely(
            logger,
            "unhandled_exception",
            transport=TRANSPORT,
            operation=_operation(request),
            code=int(BusinessCode.SYSTEM_ERROR),
            status=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            error=str(exc),
            request_id=_request_id(request),
            exc_info=True,
        )

        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_response("Internal server error", details),
        )
