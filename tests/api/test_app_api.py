import re

import pytest
from fastapi import APIRouter

from core.exceptions import business_code_to_http_status
from shared.codes import BusinessCode


@pytest.mark.parametrize(
    "code, status",
    [
        (BusinessCode.PARAM_VALIDATION_ERROR, 400),
        (BusinessCode.USER_NOT_FOUND, 404),
        (BusinessCode.PRODUCT_NOT_FOUND, 404),
        (BusinessCode.SYSTEM_ERROR, 500),
        (10000, 500),
        (20006, 500),
    ],
)
def test_business_code_mapping(code, status):
    assert business_code_to_http_status(code) == status


def test_business_codes_are_the_catalog_set():
    assert {c.name for c in BusinessCode} == {
        "PARAM_VALIDATION_ERROR",
        "USER_NOT_FOUND",
        "PRODUCT_NOT_FOUND",
        "SYSTEM_ERROR",
    }


async def test_health(client):
    resp = await client.get("/health")

    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", body["timestamp"])


async def test_unknown_route_is_json_404(client):
    resp = await client.get("/api/v1/orders")

    assert resp.status_code == 404
    assert resp.json() == {"error": "Endpoint not found"}


async def test_request_id_is_echoed(client):
    resp = await client.get("/health", headers={"X-Request-ID": "req-123"})

    assert resp.headers["X-Request-ID"] == "req-123"


async def test_docs_served_in_development(client):
    resp = await client.get("/api-docs")

    assert resp.status_code == 200


async def test_unexpected_error_is_500(app, client):
    router = APIRouter()

    @router.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    app.include_router(router)

    resp = await client.get("/boom")

    assert resp.status_code == 500
    assert resp.headers["content-type"] == "application/json"
    body = resp.json()
    assert body["error"] == "Internal server error"
    assert body["details"]["exception"] == "database exploded"


async def test_unexpected_error_hides_details_outside_debug(app, client, monkeypatch):
    from core.config import settings

    monkeypatch.setattr(settings, "DEBUG", False)
    router = APIRouter()

    @router.get("/boom")
    async def boom():
        raise RuntimeError("database exploded")

    app.include_router(router)

    resp = await client.get("/boom")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Internal server error"}
