"""
商品API路由
"""
from fastapi import APIRouter, Depends, status

from application.services.product_service import ProductApplicationService
from application.dto import (
    CreateProductDTO,
    ProductResponseDTO,
    SearchProductsQueryDTO,
    ProductListDTO,
)
from api.dependencies import get_product_service, entity_id_path, query_params
from core.response import ERROR_RESPONSES

router = APIRouter(
    prefix="/products",
    tags=["商品管理"],
    responses={400: ERROR_RESPONSES[400]},
)


@router.get("", summary="搜索商品", response_model=ProductListDTO)
async def search_products(
    params: SearchProductsQueryDTO = Depends(query_params(SearchProductsQueryDTO)),
    service: ProductApplicationService = Depends(get_product_service),
):
    """
    按条件搜索商品，结果按创建时间倒序

    - **query**: 名称或描述的子串（不区分大小写）
    - **category**: 分类精确匹配
    - **minPrice** / **maxPrice**: 价格闭区间
    """
    return await service.search_products(params)


@router.post(
    "",
    summary="创建商品",
    response_model=ProductResponseDTO,
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    product_data: CreateProductDTO,
    service: ProductApplicationService = Depends(get_product_service),
):
    return await service.create_product(product_data)


@router.get(
    "/{id}",
    summary="获取商品详情",
    response_model=ProductResponseDTO,
    responses={404: ERROR_RESPONSES[404]},
)
async def get_product(
    id: str = entity_id_path("商品ID（UUID v4）"),
    service: ProductApplicationService = Depends(get_product_service),
):
    return await service.get_product(id)
