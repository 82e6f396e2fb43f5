from __future__ import annotations

from application.dto import UserResponseDTO, UserListDTO
from grpc_app.stubs import catalog_pb2
from shared.timestamps import isoformat_utc


def user_dto_to_proto(dto: UserResponseDTO) -> catalog_pb2.User:
    return catalog_pb2.User(
        id=dto.id,
        username=dto.username,
        email=dto.email,
        full_name=dto.full_name,
        is_active=bool(dto.is_active),
        created_at=isoformat_utc(dto.created_at),
        updated_at=isoformat_utc(dto.updated_at),
    )


def user_list_to_proto(dto: UserListDTO) -> catalog_pb2.ListUsersResponse:
    return catalog_pb2.ListUsersResponse(
        users=[user_dto_to_proto(u) for u in dto.users],
        total_count=dto.total_count,
        page=dto.page,
        page_size=dto.page_size,
    )
