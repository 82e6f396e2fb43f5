"""
用户仓储实现 - 基于进程内存的有序集合
"""
from typing import Optional, List

from domain.user.entity import User
from domain.user.repository import UserRepository
from domain.common.exceptions import UserNotFoundException
from infrastructure.repositories.memory import InMemoryCollection
from core.logging_config import get_logger


logger = get_logger(__name__)


class InMemoryUserRepository(UserRepository):
    """用户仓储的内存实现"""

    def __init__(self) -> None:
        self._users: InMemoryCollection[User] = InMemoryCollection(User.copy)

    async def create(self, user: User) -> User:
        """创建用户"""
        created = self._users.put(user.id, user)
        logger.debug("user_stored", user_id=user.id)
        return created

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """根据ID获取用户"""
        return self._users.get(user_id)

    async def get_all(self) -> List[User]:
        """按插入顺序获取全部用户"""
        return self._users.values()

    async def update(self, user: User) -> User:
        """更新用户（原位替换，保持插入顺序）"""
        updated = self._users.replace_if_present(user.id, user)
        if updated is None:
            raise UserNotFoundException(user.id)
        return updated

    async def delete(self, user_id: str) -> bool:
        """删除用户（硬删除）"""
        removed = self._users.remove(user_id)
        if removed:
            logger.debug("user_removed", user_id=user_id)
        return removed
