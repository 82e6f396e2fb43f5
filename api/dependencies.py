"""
API依赖项 - 应用服务注入与查询参数校验
"""
from typing import Callable, Type, TypeVar

from fastapi import Path, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from application.services.user_service import UserApplicationService
from application.services.product_service import ProductApplicationService
from shared.constraints import UUID4_PATTERN


QueryModel = TypeVar("QueryModel", bound=BaseModel)


async def get_user_service(request: Request) -> UserApplicationService:
    return request.app.state.user_service


async def get_product_service(request: Request) -> ProductApplicationService:
    return request.app.state.product_service


def entity_id_path(description: str = "资源ID（UUID v4）"):
    """路径参数 ``{id}``：格式不符时在进入路由前返回 400"""
    return Path(..., pattern=UUID4_PATTERN, description=description)


def query_params(model: Type[QueryModel]) -> Callable[[Request], QueryModel]:
    """
    把整组查询参数交给同一个 DTO 校验

    查询参数的约束与 gRPC 请求共用一张表（shared.constraints），
    错误定位补上 ``query`` 前缀，交由全局异常处理器渲染。
    """

    async def dependency(request: Request) -> QueryModel:
        try:
            return model.model_validate(dict(request.query_params))
        except ValidationError as exc:
            errors = [
                {**error, "loc": ("query", *error.get("loc", ()))}
                for error in exc.errors(include_url=False)
            ]
            raise RequestValidationError(errors)

    return dependency
