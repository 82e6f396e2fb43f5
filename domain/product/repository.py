"""
商品仓储接口
"""
from abc import ABC, abstractmethod
from typing import Optional, List
from .entity import Product


class ProductRepository(ABC):
    """商品仓储抽象接口"""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """创建商品"""
        pass

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """根据ID获取商品"""
        pass

    @abstractmethod
    async def get_all(self) -> List[Product]:
        """按插入顺序获取全部商品"""
        pass
