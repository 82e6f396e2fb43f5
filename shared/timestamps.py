"""
UTC timestamp helpers shared by the domain, DTO and gRPC mapping layers.

All entity timestamps are UTC with millisecond precision and render as
ISO-8601 with a `Z` suffix, e.g. ``2024-05-01T08:30:12.345Z``.
"""
from datetime import datetime, timezone
from typing import Annotated

from pydantic import PlainSerializer


def utc_now() -> datetime:
    """Current UTC time truncated to milliseconds."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def isoformat_utc(value: datetime) -> str:
    ts = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    s = ts.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return s.replace("+00:00", "Z")


# Serialises identically in python and JSON mode, so REST and gRPC render the same text
UtcTimestamp = Annotated[datetime, PlainSerializer(isoformat_utc, return_type=str, when_used="always")]
