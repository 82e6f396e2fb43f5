"""
商品领域实体
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional
import uuid

from shared.timestamps import utc_now


@dataclass
class Product:
    """商品实体；price 为整数金额（最小货币单位或整单位）"""

    id: str
    name: str
    description: str
    price: int
    quantity: int
    category: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        name: str,
        description: str,
        price: int,
        quantity: int,
        category: str,
    ) -> "Product":
        now = utc_now()
        return cls(
            id=str(uuid.uuid4()),
            name=name,
            description=description,
            price=price,
            quantity=quantity,
            category=category,
            created_at=now,
            updated_at=now,
        )

    def matches(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[int] = None,
        max_price: Optional[int] = None,
    ) -> bool:
        """业务规则：搜索条件之间为 AND；query 不区分大小写匹配名称或描述"""
        if query:
            needle = query.lower()
            if needle not in self.name.lower() and needle not in self.description.lower():
                return False
        if category and self.category != category:
            return False
        if min_price is not None and self.price < min_price:
            return False
        if max_price is not None and self.price > max_price:
            return False
        return True

    def copy(self) -> "Product":
        return replace(self)
