from __future__ import annotations

import grpc

from application.services.user_service import UserApplicationService
from application.dto import (
    EntityIdDTO,
    CreateUserDTO,
    UpdateUserRequestDTO,
    ListUsersQueryDTO,
)
from grpc_app.stubs import catalog_pb2, catalog_pb2_grpc
from grpc_app.mappers.user import user_dto_to_proto, user_list_to_proto
from grpc_app.validation import validate_request


class UserService(catalog_pb2_grpc.UserServiceServicer):
    """Adapter: validate the message, call the application service, map the reply.

    Errors are left to ``ExceptionMappingInterceptor``.
    """

    def __init__(self, service: UserApplicationService) -> None:
        self._svc = service

    async def GetUser(self, request: catalog_pb2.GetUserRequest, context: grpc.aio.ServicerContext) -> catalog_pb2.GetUserResponse:  # type: ignore[override]
        params = validate_request(EntityIdDTO, request)
        user = await self._svc.get_user(params.id)
        return catalog_pb2.GetUserResponse(user=user_dto_to_proto(user))

    async def CreateUser(self, request: catalog_pb2.CreateUserRequest, context: grpc.aio.ServicerContext) -> catalog_pb2.CreateUserResponse:  # type: ignore[override]
        dto = validate_request(CreateUserDTO, request)
        user = await self._svc.create_user(dto)
        return catalog_pb2.CreateUserResponse(user=user_dto_to_proto(user))

    async def UpdateUser(self, request: catalog_pb2.UpdateUserRequest, context: grpc.aio.ServicerContext) -> catalog_pb2.UpdateUserResponse:  # type: ignore[override]
        params = validate_request(UpdateUserRequestDTO, request)
        user = await self._svc.update_user(params.id, params.data)
        return catalog_pb2.UpdateUserResponse(user=user_dto_to_proto(user))

    async def DeleteUser(self, request: catalog_pb2.DeleteUserRequest, context: grpc.aio.ServicerContext) -> catalog_pb2.DeleteUserResponse:  # type: ignore[override]
        params = validate_request(EntityIdDTO, request)
        success = await self._svc.delete_user(params.id)
        return catalog_pb2.DeleteUserResponse(success=success)

    async def ListUsers(self, request: catalog_pb2.ListUsersRequest, context: grpc.aio.ServicerContext) -> catalog_pb2.ListUsersResponse:  # type: ignore[override]
        options = validate_request(ListUsersQueryDTO, request)
        result = await self._svc.list_users(options)
        return user_list_to_proto(result)
