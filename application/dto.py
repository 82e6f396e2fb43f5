"""
数据传输对象（DTO）- 应用层与表现层（REST / gRPC）之间的数据传输

请求 DTO 由 shared.constraints 中的约束类型组合而成，两种传输协议共用同一套 DTO：
REST 以 camelCase 别名收发 JSON，gRPC 以 snake_case 字段名填充。
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List

from domain.user.entity import UserPatch
from shared.constraints import (
    EntityId,
    Username,
    Email,
    FullName,
    ActiveFlag,
    ProductName,
    Description,
    Price,
    Quantity,
    Category,
    Page,
    PageSize,
    SearchText,
    CategoryFilter,
    PriceBound,
)
from shared.timestamps import UtcTimestamp


class DTOBase(BaseModel):
    """Base DTO: camelCase aliases on the wire, UTC-Z millisecond timestamps."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # 错误定位统一使用字段名，由各传输层自行换算成线上字段名
        loc_by_alias=False,
    )


# ---------- 用户 ----------

class EntityIdDTO(DTOBase):
    """按ID操作用户/商品的请求（Get/Delete）"""
    id: EntityId


class CreateUserDTO(DTOBase):
    """用户创建DTO"""
    username: Username
    email: Email
    full_name: FullName


class UpdateUserDTO(DTOBase):
    """用户更新DTO：全部可选，未提供的字段保持不变"""
    username: Optional[Username] = None
    email: Optional[Email] = None
    full_name: Optional[FullName] = None
    is_active: Optional[ActiveFlag] = None

    def to_patch(self) -> UserPatch:
        return UserPatch(
            username=self.username,
            email=self.email,
            full_name=self.full_name,
            is_active=self.is_active,
        )


class UpdateUserRequestDTO(DTOBase):
    """gRPC UpdateUser 请求：id + 嵌套 data"""
    id: EntityId
    data: UpdateUserDTO


class ListUsersQueryDTO(DTOBase):
    """用户列表查询参数"""
    page: Page
    page_size: PageSize
    sort_by: Optional[SearchText] = None
    filter: Optional[SearchText] = None


class UserResponseDTO(DTOBase):
    """用户响应DTO"""
    id: str
    username: str
    email: str
    full_name: str
    is_active: bool
    created_at: UtcTimestamp
    updated_at: UtcTimestamp

    model_config = ConfigDict(from_attributes=True)


class UserListDTO(DTOBase):
    users: List[UserResponseDTO]
    total_count: int
    page: int
    page_size: int


class DeleteResultDTO(DTOBase):
    success: bool


# ---------- 商品 ----------

class CreateProductDTO(DTOBase):
    """商品创建DTO"""
    name: ProductName
    description: Description
    price: Price
    quantity: Quantity
    category: Category


class SearchProductsQueryDTO(DTOBase):
    """商品搜索参数"""
    query: Optional[SearchText] = None
    category: Optional[CategoryFilter] = None
    min_price: Optional[PriceBound] = None
    max_price: Optional[PriceBound] = None
    page: Page
    page_size: PageSize


class ProductResponseDTO(DTOBase):
    """商品响应DTO"""
    id: str
    name: str
    description: str
    price: int
    quantity: int
    category: str
    created_at: UtcTimestamp
    updated_at: UtcTimestamp

    model_config = ConfigDict(from_attributes=True)


class ProductListDTO(DTOBase):
    products: List[ProductResponseDTO]
    total_count: int
    page: int
    page_size: int


# ---------- 通用 ----------

class HealthDTO(DTOBase):
    status: str
    timestamp: UtcTimestamp
