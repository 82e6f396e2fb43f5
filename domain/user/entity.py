"""
用户领域实体 - 包含核心业务规则
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from shared.timestamps import isoformat_utc, utc_now


@dataclass
class User:
    """用户实体 - 领域核心"""

    id: str
    username: str
    email: str
    full_name: str
    is_active: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def register(cls, username: str, email: str, full_name: str) -> "User":
        """业务规则：新用户分配 UUID v4，默认激活，创建/更新时间相同"""
        now = utc_now()
        return cls(
            id=str(uuid.uuid4()),
            username=username,
            email=email,
            full_name=full_name,
            is_active=True,
            created_at=now,
            updated_at=now,
        )

    def apply(self, patch: "UserPatch") -> None:
        """业务规则：只合并补丁中出现的字段，并刷新 updated_at"""
        if patch.username is not None:
            self.username = patch.username
        if patch.email is not None:
            self.email = patch.email
        if patch.full_name is not None:
            self.full_name = patch.full_name
        if patch.is_active is not None:
            self.is_active = patch.is_active
        self.updated_at = utc_now()

    def copy(self) -> "User":
        return replace(self)


@dataclass(frozen=True)
class UserPatch:
    """用户部分更新：每个可变字段一个可选值，None 表示不修改"""

    username: Optional[str] = None
    email: Optional[str] = None
    full_name: Optional[str] = None
    is_active: Optional[bool] = None


class UserSortField(str, Enum):
    """可排序的用户字段（均为字符串取值）"""

    ID = "id"
    USERNAME = "username"
    EMAIL = "email"
    FULL_NAME = "fullName"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"

    @classmethod
    def resolve(cls, raw: Optional[str]) -> Optional["UserSortField"]:
        """解析 camelCase 或 snake_case 字段名；无法识别时返回 None（保持插入顺序）"""
        if not raw:
            return None
        return _SORT_ALIASES.get(raw)

    def key(self, user: User) -> str:
        if self is UserSortField.ID:
            return user.id
        if self is UserSortField.USERNAME:
            return user.username
        if self is UserSortField.EMAIL:
            return user.email
        if self is UserSortField.FULL_NAME:
            return user.full_name
        if self is UserSortField.CREATED_AT:
            return isoformat_utc(user.created_at) if user.created_at else ""
        return isoformat_utc(user.updated_at) if user.updated_at else ""


_SORT_ALIASES = {field.value: field for field in UserSortField}
_SORT_ALIASES.update({
    "full_name": UserSortField.FULL_NAME,
    "created_at": UserSortField.CREATED_AT,
    "updated_at": UserSortField.UPDATED_AT,
})
