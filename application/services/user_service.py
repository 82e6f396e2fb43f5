"""
用户应用服务（application/services）- 编排领域对象并处理应用逻辑
"""
from domain.user.entity import User, UserSortField
from domain.user.repository import UserRepository
from domain.common.exceptions import UserNotFoundException
from domain.common.pagination import paginate
from application.dto import (
    CreateUserDTO,
    UpdateUserDTO,
    UserResponseDTO,
    ListUsersQueryDTO,
    UserListDTO,
)
from core.logging_config import get_logger


logger = get_logger(__name__)


class UserApplicationService:
    """用户应用服务 - 处理应用层逻辑"""

    def __init__(self, repository: UserRepository):
        self._repository = repository

    async def _get_entity(self, user_id: str) -> User:
        user = await self._repository.get_by_id(user_id)
        if not user:
            raise UserNotFoundException(user_id)
        return user

    async def create_user(self, data: CreateUserDTO) -> UserResponseDTO:
        """创建用户（不校验用户名/邮箱唯一性）"""
        user = User.register(
            username=data.username,
            email=data.email,
            full_name=data.full_name,
        )
        created = await self._repository.create(user)
        logger.info("user_created", user_id=created.id, username=created.username)
        return UserResponseDTO.model_validate(created)

    async def get_user(self, user_id: str) -> UserResponseDTO:
        """获取用户，不存在时抛出 UserNotFoundException"""
        user = await self._get_entity(user_id)
        return UserResponseDTO.model_validate(user)

    async def update_user(self, user_id: str, data: UpdateUserDTO) -> UserResponseDTO:
        """部分更新：只合并提供的字段，created_at 不变"""
        user = await self._get_entity(user_id)
        user.apply(data.to_patch())
        updated = await self._repository.update(user)
        logger.info("user_updated", user_id=user_id)
        return UserResponseDTO.model_validate(updated)

    async def delete_user(self, user_id: str) -> bool:
        """硬删除用户"""
        await self._get_entity(user_id)
        deleted = await self._repository.delete(user_id)
        logger.info("user_deleted", user_id=user_id)
        return deleted

    async def list_users(self, options: ListUsersQueryDTO) -> UserListDTO:
        """过滤 -> 排序 -> 分页；未指定或无法识别的 sort_by 保持插入顺序"""
        users = await self._repository.get_all()

        if options.filter:
            needle = options.filter.lower()
            users = [
                u for u in users
                if needle in u.username.lower()
                or needle in u.email.lower()
                or needle in u.full_name.lower()
            ]

        sort_field = UserSortField.resolve(options.sort_by)
        if sort_field is not None:
            users = sorted(users, key=sort_field.key)

        page_items, total = paginate(users, options.page, options.page_size)
        return UserListDTO(
            users=[UserResponseDTO.model_validate(u) for u in page_items],
            total_count=total,
            page=options.page,
            page_size=options.page_size,
        )
