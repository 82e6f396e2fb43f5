"""gRPC transport layer for the catalog service.

This package hosts:
- The ``catalog.v1`` protocol definition (in `protos/`), compiled at runtime by `stubs`.
- Server bootstrap and interceptors.
- Request validation and thin service adapters that map gRPC messages to application services.
"""
