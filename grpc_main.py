import asyncio

from application.services.user_service import UserApplicationService
from application.services.product_service import ProductApplicationService
from core.config import settings
from core.logging_config import configure_logging, get_logger
from grpc_app.server import create_server
from infrastructure.store import InMemoryStore


logger = get_logger(__name__)


async def main() -> None:
    """Run the gRPC server on its own, backed by a fresh in-memory store."""
    store = InMemoryStore()
    server = await create_server(
        UserApplicationService(store.users),
        ProductApplicationService(store.products),
    )
    address = f"{settings.grpc.host}:{settings.grpc.port}"
    logger.info("grpc_starting", address=address)
    await server.start()
    logger.info("grpc_started", address=address)
    try:
        await server.wait_for_termination()
    except asyncio.CancelledError:
        logger.info("grpc_stopping")
        await server.stop(grace=None)
        raise


if __name__ == "__main__":
    configure_logging()
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
