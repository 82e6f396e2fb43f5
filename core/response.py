"""
统一错误响应格式定义

成功响应直接返回实体/集合（camelCase JSON），失败响应统一为
``{"error": str, "details"?: Any}``。
"""
from typing import Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """错误响应模型"""
    error: str
    details: Optional[Any] = None


def error_response(message: str, details: Any = None) -> dict:
    """
    创建错误响应体

    Args:
        message: 错误消息
        details: 错误详情（可选，为空时不输出）

    Returns:
        dict: 可直接交给 JSONResponse 的内容
    """
    return ErrorResponse(error=message, details=details).model_dump(mode="json", exclude_none=True)


ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "参数校验失败"},
    404: {"model": ErrorResponse, "description": "资源不存在"},
    500: {"model": ErrorResponse, "description": "系统内部错误"},
}
