"""
Shared business codes used across layers (Domain/Core/API/gRPC).

This package exposes BusinessCode at `shared.codes` so the REST exception
handlers and the gRPC interceptor map the same codes to their own statuses.
"""
from enum import IntEnum


class BusinessCode(IntEnum):
    """Unified business status codes (single source of truth)."""

    # Parameter errors (1xxxx)
    PARAM_VALIDATION_ERROR = 10003

    # Business errors (2xxxx)
    USER_NOT_FOUND = 20001
    PRODUCT_NOT_FOUND = 20007

    # System errors (4xxxx)
    SYSTEM_ERROR = 40000


__all__ = ["BusinessCode"]
