"""领域层业务异常定义，供领域、应用与传输适配层使用。

异常以业务码（BusinessCode）打标签，REST 异常处理器与 gRPC 拦截器直接按业务码
映射状态码，不再依赖错误消息的文本匹配。
"""
from __future__ import annotations

from typing import Optional, Sequence
from shared.codes import BusinessCode


class BusinessException(Exception):
    """业务异常基类"""

    def __init__(
        self,
        code: int,
        message: str,
        error_type: str = "BusinessError",
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.error_type = error_type
        self.details = details
        super().__init__(self.message)


class UserNotFoundException(BusinessException):
    def __init__(self, user_id: Optional[str] = None):
        details = {"user_id": user_id} if user_id else None
        super().__init__(
            code=BusinessCode.USER_NOT_FOUND,
            message="User not found",
            error_type="UserNotFound",
            details=details,
        )


class ProductNotFoundException(BusinessException):
    def __init__(self, product_id: Optional[str] = None):
        details = {"product_id": product_id} if product_id else None
        super().__init__(
            code=BusinessCode.PRODUCT_NOT_FOUND,
            message="Product not found",
            error_type="ProductNotFound",
            details=details,
        )


class RequestParamsInvalidException(BusinessException):
    """请求参数校验失败：汇总全部违规项，而不是只报第一个。"""

    PREFIX = "Invalid request parameters: "

    def __init__(self, violations: Sequence[str]):
        self.violations = list(violations)
        super().__init__(
            code=BusinessCode.PARAM_VALIDATION_ERROR,
            message=self.PREFIX + ", ".join(self.violations),
            error_type="ValidationError",
            details={"violations": self.violations},
        )
