from __future__ import annotations

from typing import Sequence
import grpc
from grpc_health.v1 import health, health_pb2_grpc, health_pb2
from grpc_reflection.v1alpha import reflection

from application.services.user_service import UserApplicationService
from application.services.product_service import ProductApplicationService
from core.config import settings
from core.logging_config import get_logger
from grpc_app.interceptors.request_id import RequestIdInterceptor
from grpc_app.interceptors.logging import LoggingInterceptor
from grpc_app.interceptors.exceptions import ExceptionMappingInterceptor
from grpc_app.stubs import catalog_pb2_grpc, USER_SERVICE, PRODUCT_SERVICE
from grpc_app.services.user_service import UserService
from grpc_app.services.product_service import ProductService


logger = get_logger(__name__)


async def build_server(
    user_service: UserApplicationService,
    product_service: ProductApplicationService,
    *,
    enable_reflection: bool | None = None,
) -> grpc.aio.Server:
    """Assemble a server with services, health and (optionally) reflection; no port is bound."""
    interceptors: Sequence[grpc.aio.ServerInterceptor] = (
        RequestIdInterceptor(),
        LoggingInterceptor(),
        ExceptionMappingInterceptor(),  # maps business exceptions
    )

    options = [
        ("grpc.max_concurrent_streams", max(1, settings.grpc.max_concurrent_streams)),
    ]
    server = grpc.aio.server(interceptors=interceptors, options=options)

    # Register services
    catalog_pb2_grpc.add_UserServiceServicer_to_server(UserService(user_service), server)
    catalog_pb2_grpc.add_ProductServiceServicer_to_server(ProductService(product_service), server)

    # Health service; an aio server needs the aio servicer
    health_svc = health.aio.HealthServicer()
    health_pb2_grpc.add_HealthServicer_to_server(health_svc, server)
    for name in ("", USER_SERVICE, PRODUCT_SERVICE):
        await health_svc.set(name, health_pb2.HealthCheckResponse.SERVING)

    if enable_reflection is None:
        enable_reflection = settings.grpc.reflection
    if enable_reflection:
        reflection.enable_server_reflection(
            (USER_SERVICE, PRODUCT_SERVICE, health.SERVICE_NAME, reflection.SERVICE_NAME),
            server,
        )

    return server


def _server_credentials() -> grpc.ServerCredentials:
    tls = settings.grpc.tls
    if not (tls.cert and tls.key):
        raise RuntimeError("GRPC TLS enabled but cert/key not provided")
    with open(tls.cert, "rb") as f:
        cert_chain = f.read()
    with open(tls.key, "rb") as f:
        private_key = f.read()
    root_certificates = None
    if tls.ca:
        with open(tls.ca, "rb") as f:
            root_certificates = f.read()
    return grpc.ssl_server_credentials(
        [(private_key, cert_chain)],
        root_certificates=root_certificates,
        require_client_auth=bool(root_certificates),
    )


async def create_server(
    user_service: UserApplicationService,
    product_service: ProductApplicationService,
) -> grpc.aio.Server:
    """Build the server and bind it to ``settings.grpc.host:port``."""
    server = await build_server(user_service, product_service)

    address = f"{settings.grpc.host}:{settings.grpc.port}"
    if settings.grpc.tls.enabled:
        server.add_secure_port(address, _server_credentials())
    else:
        server.add_insecure_port(address)
    logger.info("grpc_server_bound", address=address, tls=settings.grpc.tls.enabled)

    return server
