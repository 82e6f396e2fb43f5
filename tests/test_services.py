from datetime import timedelta

import pytest

from application.dto import (
    CreateProductDTO,
    CreateUserDTO,
    ListUsersQueryDTO,
    SearchProductsQueryDTO,
    UpdateUserDTO,
)
from domain.common.exceptions import ProductNotFoundException, UserNotFoundException
from domain.product.entity import Product
from shared.codes import BusinessCode
from tests.data import FAKE_UUID, LIST_USERS, SEARCH_PRODUCTS, TEST_PRODUCT, TEST_USER


async def _seed_users(user_service):
    return [await user_service.create_user(CreateUserDTO(**u)) for u in LIST_USERS]


async def _seed_products(product_service):
    return [await product_service.create_product(CreateProductDTO(**p)) for p in SEARCH_PRODUCTS]


def _search(**kwargs) -> SearchProductsQueryDTO:
    kwargs.setdefault("page", 1)
    kwargs.setdefault("page_size", 10)
    return SearchProductsQueryDTO(**kwargs)


# ---------- users ----------

async def test_create_then_get_user(user_service):
    created = await user_service.create_user(CreateUserDTO(**TEST_USER))

    assert created.created_at == created.updated_at
    assert created.is_active is True
    assert await user_service.get_user(created.id) == created


async def test_get_missing_user_raises_tagged_not_found(user_service):
    with pytest.raises(UserNotFoundException) as exc_info:
        await user_service.get_user(FAKE_UUID)

    assert exc_info.value.code == BusinessCode.USER_NOT_FOUND
    assert exc_info.value.message == "User not found"


async def test_update_changes_only_given_fields(user_service):
    created = await user_service.create_user(CreateUserDTO(**TEST_USER))

    updated = await user_service.update_user(created.id, UpdateUserDTO(full_name="Renamed User"))

    assert updated.full_name == "Renamed User"
    assert updated.username == created.username
    assert updated.email == created.email
    assert updated.is_active is True
    assert updated.created_at == created.created_at
    assert updated.updated_at >= created.updated_at


async def test_update_missing_user_raises(user_service):
    with pytest.raises(UserNotFoundException):
        await user_service.update_user(FAKE_UUID, UpdateUserDTO(is_active=False))


async def test_delete_then_get_raises(user_service):
    created = await user_service.create_user(CreateUserDTO(**TEST_USER))

    assert await user_service.delete_user(created.id) is True
    with pytest.raises(UserNotFoundException):
        await user_service.get_user(created.id)
    with pytest.raises(UserNotFoundException):
        await user_service.delete_user(created.id)


async def test_list_users_keeps_insertion_order(user_service):
    seeded = await _seed_users(user_service)

    result = await user_service.list_users(ListUsersQueryDTO(page=1, page_size=10))

    assert [u.id for u in result.users] == [u.id for u in seeded]
    assert result.total_count == 3


async def test_list_users_sorts_by_known_field(user_service):
    await _seed_users(user_service)

    by_username = await user_service.list_users(ListUsersQueryDTO(page=1, page_size=10, sort_by="username"))
    by_full_name = await user_service.list_users(ListUsersQueryDTO(page=1, page_size=10, sort_by="full_name"))

    assert [u.username for u in by_username.users] == ["alice", "bob", "charlie"]
    assert [u.full_name for u in by_full_name.users] == ["Alice Smith", "Bob Johnson", "Charlie Brown"]


async def test_list_users_unknown_sort_field_keeps_insertion_order(user_service):
    await _seed_users(user_service)

    result = await user_service.list_users(ListUsersQueryDTO(page=1, page_size=10, sort_by="password"))

    assert [u.username for u in result.users] == ["charlie", "alice", "bob"]


async def test_list_users_filter_counts_before_paging(user_service):
    await _seed_users(user_service)

    result = await user_service.list_users(ListUsersQueryDTO(page=1, page_size=1, filter="LI"))

    # charlie and alice match case-insensitively, bob does not
    assert result.total_count == 2
    assert [u.username for u in result.users] == ["charlie"]
    assert result.page == 1
    assert result.page_size == 1


# ---------- products ----------

async def test_create_then_get_product(product_service):
    created = await product_service.create_product(CreateProductDTO(**TEST_PRODUCT))

    assert created.price == 100
    assert await product_service.get_product(created.id) == created


async def test_get_missing_product_raises(product_service):
    with pytest.raises(ProductNotFoundException) as exc_info:
        await product_service.get_product(FAKE_UUID)

    assert exc_info.value.message == "Product not found"


async def test_search_pagination_over_fixtures(product_service):
    await _seed_products(product_service)

    everything = await product_service.search_products(_search(page_size=100))
    second_page = await product_service.search_products(_search(page=2, page_size=2))

    assert second_page.total_count == 6
    assert [p.id for p in second_page.products] == [p.id for p in everything.products[2:4]]


async def test_search_filters(product_service):
    await _seed_products(product_service)

    books = await product_service.search_products(_search(category="Books"))
    phones = await product_service.search_products(_search(category="Electronics", min_price=800))
    mid_range = await product_service.search_products(_search(min_price=100, max_price=300))
    text = await product_service.search_products(_search(query="programming"))
    nothing = await product_service.search_products(_search(query="NonExistentXYZ"))

    assert books.total_count == 3
    assert all(p.category == "Books" for p in books.products)
    assert sorted(p.name for p in phones.products) == ["Samsung Galaxy S24", "iPhone 15 Pro"]
    assert [p.name for p in mid_range.products] == ["Coffee Maker Pro"]
    assert sorted(p.name for p in text.products) == ["Advanced JavaScript", "JavaScript Guide"]
    assert nothing.products == []
    assert nothing.total_count == 0


async def test_search_orders_newest_first_with_stable_ties(store, product_service):
    base = Product.create(name="Old", description="first", price=1, quantity=1, category="Misc")
    older = Product.create(name="Older", description="second", price=1, quantity=1, category="Misc")
    newer = Product.create(name="Newer", description="third", price=1, quantity=1, category="Misc")
    tie = Product.create(name="Tie", description="fourth", price=1, quantity=1, category="Misc")
    older.created_at = base.created_at
    newer.created_at = base.created_at + timedelta(seconds=1)
    tie.created_at = newer.created_at
    for product in (base, older, newer, tie):
        await store.products.create(product)

    result = await product_service.search_products(_search())

    assert [p.name for p in result.products] == ["Newer", "Tie", "Old", "Older"]


async def test_store_counts_follow_creates_and_deletes(store, user_service, product_service):
    seeded = await _seed_users(user_service)
    await _seed_products(product_service)

    await user_service.delete_user(seeded[0].id)

    assert len(await store.users.get_all()) == 2
    assert len(await store.products.get_all()) == 6
