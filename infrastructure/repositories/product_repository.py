"""
商品仓储实现 - 基于进程内存的有序集合
"""
from typing import Optional, List

from domain.product.entity import Product
from domain.product.repository import ProductRepository
from infrastructure.repositories.memory import InMemoryCollection
from core.logging_config import get_logger


logger = get_logger(__name__)


class InMemoryProductRepository(ProductRepository):
    """商品仓储的内存实现"""

    def __init__(self) -> None:
        self._products: InMemoryCollection[Product] = InMemoryCollection(Product.copy)

    async def create(self, product: Product) -> Product:
        created = self._products.put(product.id, product)
        logger.debug("product_stored", product_id=product.id)
        return created

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        return self._products.get(product_id)

    async def get_all(self) -> List[Product]:
        return self._products.values()
