import grpc
import pytest

from grpc_app.stubs import catalog_pb2
from tests.data import FAKE_UUID, SEARCH_PRODUCTS, TEST_PRODUCT


async def _create(product_stub, payload=None) -> catalog_pb2.Product:
    reply = await product_stub.CreateProduct(catalog_pb2.CreateProductRequest(**(payload or TEST_PRODUCT)))
    return reply.product


async def _seed(product_stub):
    return [await _create(product_stub, p) for p in SEARCH_PRODUCTS]


async def _search(product_stub, **kwargs) -> catalog_pb2.SearchProductsResponse:
    kwargs.setdefault("page", 1)
    kwargs.setdefault("page_size", 10)
    return await product_stub.SearchProducts(catalog_pb2.SearchProductsRequest(**kwargs))


async def test_create_then_get_product(product_stub):
    product = await _create(product_stub)

    assert product.name == TEST_PRODUCT["name"]
    assert product.price == 100
    assert product.created_at == product.updated_at

    reply = await product_stub.GetProduct(catalog_pb2.GetProductRequest(id=product.id))
    assert reply.product == product


async def test_get_unknown_product_is_not_found(product_stub):
    with pytest.raises(grpc.aio.AioRpcError) as exc_info:
        await product_stub.GetProduct(catalog_pb2.GetProductRequest(id=FAKE_UUID))

    assert exc_info.value.code() == grpc.StatusCode.NOT_FOUND
    assert exc_info.value.details() == "Product not found"


async def test_negative_price_cannot_be_negative(product_stub):
    with pytest.raises(grpc.aio.AioRpcError) as exc_info:
        await _create(product_stub, {**TEST_PRODUCT, "price": -1})

    assert exc_info.value.code() == grpc.StatusCode.INVALID_ARGUMENT
    assert "price: price cannot be negative" in exc_info.value.details()


async def test_multiple_violations_are_all_reported(product_stub):
    payload = {**TEST_PRODUCT, "price": -1}
    payload.pop("name")

    with pytest.raises(grpc.aio.AioRpcError) as exc_info:
        await _create(product_stub, payload)

    details = exc_info.value.details()
    assert details.startswith("Invalid request parameters: ")
    assert "name: name is required" in details
    assert "price: price cannot be negative" in details


async def test_search_second_page(product_stub):
    await _seed(product_stub)

    everything = await _search(product_stub, page_size=100)
    reply = await _search(product_stub, page=2, page_size=2)

    assert reply.total_count == 6
    assert [p.id for p in reply.products] == [p.id for p in everything.products[2:4]]


async def test_search_filters(product_stub):
    await _seed(product_stub)

    books = await _search(product_stub, category="Books")
    phones = await _search(product_stub, category="Electronics", min_price=800)
    in_range = await _search(product_stub, min_price=100, max_price=300)

    assert books.total_count >= 3
    assert {p.category for p in books.products} == {"Books"}
    assert sorted(p.name for p in phones.products) == ["Samsung Galaxy S24", "iPhone 15 Pro"]
    assert all(100 <= p.price <= 300 for p in in_range.products)


async def test_explicit_zero_min_price_matches_everything(product_stub):
    await _seed(product_stub)

    # min_price=0 is set explicitly and still matches every fixture
    reply = await _search(product_stub, min_price=0)

    assert reply.total_count == 6


async def test_search_without_matches(product_stub):
    await _seed(product_stub)

    reply = await _search(product_stub, query="NonExistentXYZ")

    assert list(reply.products) == []
    assert reply.total_count == 0
