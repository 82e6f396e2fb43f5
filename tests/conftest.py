"""Pytest bootstrap configuration.

Every test gets its own in-memory store; REST tests talk to the ASGI app
in-process and gRPC tests start a real ``grpc.aio`` server on port 0 wired
with the production interceptors.
"""
import os

# Settings are read at import time
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("GRPC__ENABLED", "false")

from typing import AsyncIterator, Tuple

import grpc
import httpx
import pytest

from application.services.product_service import ProductApplicationService
from application.services.user_service import UserApplicationService
from infrastructure.store import InMemoryStore


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def user_service(store: InMemoryStore) -> UserApplicationService:
    return UserApplicationService(store.users)


@pytest.fixture
def product_service(store: InMemoryStore) -> ProductApplicationService:
    return ProductApplicationService(store.products)


@pytest.fixture
def app(store: InMemoryStore):
    from main import create_app

    return create_app(store)


@pytest.fixture
async def client(app) -> AsyncIterator[httpx.AsyncClient]:
    # Unhandled errors must come back as 500 responses, not test-side raises
    transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
async def grpc_server(user_service, product_service) -> AsyncIterator[Tuple[str, grpc.aio.Server]]:
    """Start the production server (interceptors, health, reflection) on an ephemeral port."""
    from grpc_app.server import build_server

    server = await build_server(user_service, product_service, enable_reflection=True)
    port = server.add_insecure_port("127.0.0.1:0")
    await server.start()

    target = f"127.0.0.1:{port}"
    try:
        yield target, server
    finally:
        await server.stop(grace=None)


@pytest.fixture
async def grpc_channel(grpc_server) -> AsyncIterator[grpc.aio.Channel]:
    target, _ = grpc_server
    async with grpc.aio.insecure_channel(target) as channel:
        yield channel


@pytest.fixture
def user_stub(grpc_channel):
    from grpc_app.stubs import catalog_pb2_grpc

    return catalog_pb2_grpc.UserServiceStub(grpc_channel)


@pytest.fixture
def product_stub(grpc_channel):
    from grpc_app.stubs import catalog_pb2_grpc

    return catalog_pb2_grpc.ProductServiceStub(grpc_channel)
