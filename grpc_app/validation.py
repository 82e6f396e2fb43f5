"""Request validation for gRPC handlers.

Decoded protobuf messages are turned into plain payloads following proto3
presence rules and then validated against the same DTOs the REST routes use.
"""

from __future__ import annotations

from typing import Any, Dict, Type, TypeVar

from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.message import Message
from pydantic import BaseModel, ValidationError

from core.validation import format_grpc_violations
from domain.common.exceptions import RequestParamsInvalidException


ModelT = TypeVar("ModelT", bound=BaseModel)


def message_to_payload(message: Message) -> Dict[str, Any]:
    """Convert a request message into a dict keyed by proto field name.

    - message fields and ``optional`` scalars are included only when set
    - plain strings equal to ``""`` are treated as absent
    - other scalars (numbers, bools) always carry their value
    """
    payload: Dict[str, Any] = {}
    for field in message.DESCRIPTOR.fields:
        name = field.name
        if field.type == FieldDescriptor.TYPE_MESSAGE:
            if message.HasField(name):
                payload[name] = message_to_payload(getattr(message, name))
        elif field.containing_oneof is not None:
            # proto3 `optional` is a synthetic oneof
            if message.HasField(name):
                payload[name] = getattr(message, name)
        elif field.type == FieldDescriptor.TYPE_STRING:
            value = getattr(message, name)
            if value != "":
                payload[name] = value
        else:
            payload[name] = getattr(message, name)
    return payload


def validate_request(model: Type[ModelT], message: Message) -> ModelT:
    """Validate ``message`` against ``model``, reporting every violation at once."""
    try:
        return model.model_validate(message_to_payload(message))
    except ValidationError as exc:
        raise RequestParamsInvalidException(format_grpc_violations(exc.errors()))
