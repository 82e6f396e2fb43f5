from __future__ import annotations

from application.dto import ProductResponseDTO, ProductListDTO
from grpc_app.stubs import catalog_pb2
from shared.timestamps import isoformat_utc


def product_dto_to_proto(dto: ProductResponseDTO) -> catalog_pb2.Product:
    return catalog_pb2.Product(
        id=dto.id,
        name=dto.name,
        description=dto.description,
        price=dto.price,
        quantity=dto.quantity,
        category=dto.category,
        created_at=isoformat_utc(dto.created_at),
        updated_at=isoformat_utc(dto.updated_at),
    )


def product_list_to_proto(dto: ProductListDTO) -> catalog_pb2.SearchProductsResponse:
    return catalog_pb2.SearchProductsResponse(
        products=[product_dto_to_proto(p) for p in dto.products],
        total_count=dto.total_count,
        page=dto.page,
        page_size=dto.page_size,
    )
