"""
用户API路由 - FastAPI表现层
"""
from fastapi import APIRouter, Depends, status

from application.services.user_service import UserApplicationService
from application.dto import (
    CreateUserDTO,
    UpdateUserDTO,
    UserResponseDTO,
    ListUsersQueryDTO,
    UserListDTO,
    DeleteResultDTO,
)
from api.dependencies import get_user_service, entity_id_path, query_params
from core.response import ERROR_RESPONSES

router = APIRouter(
    prefix="/users",
    tags=["用户管理"],
    responses={400: ERROR_RESPONSES[400]},
)


@router.get("", summary="获取用户列表", response_model=UserListDTO)
async def list_users(
    params: ListUsersQueryDTO = Depends(query_params(ListUsersQueryDTO)),
    service: UserApplicationService = Depends(get_user_service),
):
    """
    分页获取用户列表

    - **page** / **pageSize**: 必填，页码从 1 开始
    - **filter**: 按用户名、邮箱、全名做不区分大小写的子串匹配
    - **sortBy**: 排序字段（id / username / email / fullName / createdAt / updatedAt），升序
    """
    return await service.list_users(params)


@router.post(
    "",
    summary="创建用户",
    response_model=UserResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_user(
    user_data: CreateUserDTO,
    service: UserApplicationService = Depends(get_user_service),
):
    """
    创建新用户

    - **username**: 用户名（3-50个字符）
    - **email**: 邮箱地址
    - **fullName**: 全名（1-100个字符）
    """
    return await service.create_user(user_data)


@router.get(
    "/{id}",
    summary="获取指定用户信息",
    response_model=UserResponseDTO,
    responses={404: ERROR_RESPONSES[404]},
)
async def get_user(
    id: str = entity_id_path("用户ID（UUID v4）"),
    service: UserApplicationService = Depends(get_user_service),
):
    return await service.get_user(id)


@router.put(
    "/{id}",
    summary="更新用户信息",
    response_model=UserResponseDTO,
    responses={404: ERROR_RESPONSES[404]},
)
async def update_user(
    update_data: UpdateUserDTO,
    id: str = entity_id_path("用户ID（UUID v4）"),
    service: UserApplicationService = Depends(get_user_service),
):
    """部分更新：只修改请求体中出现的字段"""
    return await service.update_user(id, update_data)


@router.delete(
    "/{id}",
    summary="删除用户",
    response_model=DeleteResultDTO,
    responses={404: ERROR_RESPONSES[404]},
)
async def delete_user(
    id: str = entity_id_path("用户ID（UUID v4）"),
    service: UserApplicationService = Depends(get_user_service),
):
    success = await service.delete_user(id)
    return DeleteResultDTO(success=success)
