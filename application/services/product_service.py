"""
商品应用服务 - 创建、查询与搜索
"""
from domain.product.entity import Product
from domain.product.repository import ProductRepository
from domain.common.exceptions import ProductNotFoundException
from domain.common.pagination import paginate
from application.dto import (
    CreateProductDTO,
    ProductResponseDTO,
    SearchProductsQueryDTO,
    ProductListDTO,
)
from core.logging_config import get_logger


logger = get_logger(__name__)


class ProductApplicationService:
    """商品应用服务"""

    def __init__(self, repository: ProductRepository):
        self._repository = repository

    async def create_product(self, data: CreateProductDTO) -> ProductResponseDTO:
        product = Product.create(
            name=data.name,
            description=data.description,
            price=data.price,
            quantity=data.quantity,
            category=data.category,
        )
        created = await self._repository.create(product)
        logger.info("product_created", product_id=created.id, category=created.category)
        return ProductResponseDTO.model_validate(created)

    async def get_product(self, product_id: str) -> ProductResponseDTO:
        product = await self._repository.get_by_id(product_id)
        if not product:
            raise ProductNotFoundException(product_id)
        return ProductResponseDTO.model_validate(product)

    async def search_products(self, options: SearchProductsQueryDTO) -> ProductListDTO:
        """
        搜索商品

        条件之间为 AND；结果始终按创建时间倒序（最新在前），相同时间保持插入顺序。
        """
        products = [
            p for p in await self._repository.get_all()
            if p.matches(
                query=options.query,
                category=options.category,
                min_price=options.min_price,
                max_price=options.max_price,
            )
        ]
        # sorted 是稳定排序，reverse=True 时相等元素仍保持原有顺序
        products = sorted(products, key=lambda p: p.created_at, reverse=True)

        page_items, total = paginate(products, options.page, options.page_size)
        return ProductListDTO(
            products=[ProductResponseDTO.model_validate(p) for p in page_items],
            total_count=total,
            page=options.page,
            page_size=options.page_size,
        )
