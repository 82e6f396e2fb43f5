"""
Field constraint table shared by the REST and gRPC request DTOs.

Each rule is declared once as an annotated pydantic type; both transports
validate against DTOs built from these types and only differ in how the
resulting violations are phrased (see ``core.validation``).
"""
from typing import Annotated

from annotated_types import Ge, Le
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, StrictBool, StrictInt, StrictStr, StringConstraints
from pydantic_core import PydanticCustomError


UUID4_PATTERN = (
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-4[0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12}$"
)

EMAIL_ERROR_TYPE = "email_format"

MAX_PRICE = 99_999_999
MAX_QUANTITY = 99_999
MAX_PAGE = 10_000
MAX_PAGE_SIZE = 100


def _check_email(value: str) -> str:
    """只校验邮箱格式，不做规范化（保持客户端原值）。"""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise PydanticCustomError(
            EMAIL_ERROR_TYPE,
            "value is not a valid email address: {reason}",
            {"reason": str(exc)},
        )
    return value


# Identity
EntityId = Annotated[StrictStr, StringConstraints(pattern=UUID4_PATTERN)]

# User
Username = Annotated[StrictStr, StringConstraints(min_length=3, max_length=50)]
Email = Annotated[StrictStr, AfterValidator(_check_email)]
FullName = Annotated[StrictStr, StringConstraints(min_length=1, max_length=100)]
ActiveFlag = StrictBool

# Product
ProductName = Annotated[StrictStr, StringConstraints(min_length=1, max_length=100)]
Description = Annotated[StrictStr, StringConstraints(min_length=1, max_length=500)]
Price = Annotated[StrictInt, Ge(0), Le(MAX_PRICE)]
Quantity = Annotated[StrictInt, Ge(0), Le(MAX_QUANTITY)]
Category = Annotated[StrictStr, StringConstraints(min_length=1, max_length=50)]

# Listing / search (query strings arrive as text over REST, so ints stay lax)
Page = Annotated[int, Ge(1), Le(MAX_PAGE)]
PageSize = Annotated[int, Ge(1), Le(MAX_PAGE_SIZE)]
SearchText = Annotated[str, StringConstraints(max_length=100)]
CategoryFilter = Annotated[str, StringConstraints(max_length=50)]
PriceBound = Annotated[int, Ge(0)]


__all__ = [
    "UUID4_PATTERN",
    "EMAIL_ERROR_TYPE",
    "EntityId",
    "Username",
    "Email",
    "FullName",
    "ActiveFlag",
    "ProductName",
    "Description",
    "Price",
    "Quantity",
    "Category",
    "Page",
    "PageSize",
    "SearchText",
    "CategoryFilter",
    "PriceBound",
]
