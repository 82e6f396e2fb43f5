from __future__ import annotations

import grpc

from application.services.product_service import ProductApplicationService
from application.dto import EntityIdDTO, CreateProductDTO, SearchProductsQueryDTO
from grpc_app.stubs import catalog_pb2, catalog_pb2_grpc
from grpc_app.mappers.product import product_dto_to_proto, product_list_to_proto
from grpc_app.validation import validate_request


class ProductService(catalog_pb2_grpc.ProductServiceServicer):
    def __init__(self, service: ProductApplicationService) -> None:
        self._svc = service

    async def GetProduct(self, request: catalog_pb2.GetProductRequest, context: grpc.aio.ServicerContext) -> catalog_pb2.GetProductResponse:  # type: ignore[override]
        params = validate_request(EntityIdDTO, request)
        product = await self._svc.get_product(params.id)
        return catalog_pb2.GetProductResponse(product=product_dto_to_proto(product))

    async def CreateProduct(self, request: catalog_pb2.CreateProductRequest, context: grpc.aio.ServicerContext) -> catalog_pb2.CreateProductResponse:  # type: ignore[override]
        dto = validate_request(CreateProductDTO, request)
        product = await self._svc.create_product(dto)
        return catalog_pb2.CreateProductResponse(product=product_dto_to_proto(product))

    async def SearchProducts(self, request: catalog_pb2.SearchProductsRequest, context: grpc.aio.ServicerContext) -> catalog_pb2.SearchProductsResponse:  # type: ignore[override]
        options = validate_request(SearchProductsQueryDTO, request)
        result = await self._svc.search_products(options)
        return product_list_to_proto(result)
