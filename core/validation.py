"""
参数校验错误渲染

两种传输协议使用同一套 DTO（shared.constraints）进行校验，这里只负责把
pydantic 的错误明细按各自协议的习惯措辞渲染出来：

- REST：JSON Schema 风格，如 ``request/body must have required property 'name'``
- gRPC：字段级约束风格，如 ``price: price cannot be negative``
"""
from typing import Any, Dict, List, Sequence

from pydantic.alias_generators import to_camel

from shared.constraints import EMAIL_ERROR_TYPE, UUID4_PATTERN


_INT_ERRORS = {"int_type", "int_parsing", "int_from_float"}
_BOOL_ERRORS = {"bool_type", "bool_parsing"}
_OBJECT_ERRORS = {"model_type", "model_attributes_type", "dict_type"}
# 数量类字段的上限用 "cannot exceed" 并带千分位，分页参数保持 "must be at most"
_AMOUNT_FIELDS = {"price", "quantity"}

# FastAPI 的参数来源 -> OpenAPI 校验器的路径段
_REST_LOCATIONS = {"body": "body", "query": "query", "path": "params", "header": "headers"}


def _is_uuid_pattern(ctx: Dict[str, Any]) -> bool:
    return str(ctx.get("pattern", "")) == UUID4_PATTERN


# ---------- gRPC ----------

def _grpc_message(name: str, error: Dict[str, Any]) -> str:
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}

    if error_type == "missing":
        return f"{name} is required"
    if error_type == "string_too_short":
        if ctx.get("min_length") == 1:
            return f"{name} should not be empty"
        return f"{name} must be at least {ctx.get('min_length')} characters"
    if error_type == "string_too_long":
        return f"{name} must be at most {ctx.get('max_length')} characters"
    if error_type == "string_type":
        return f"{name} must be a string"
    if error_type == "string_pattern_mismatch":
        if _is_uuid_pattern(ctx):
            return f"{name} must be a valid UUID v4"
        return f"{name} has an invalid format"
    if error_type == EMAIL_ERROR_TYPE:
        return f"{name} must be a valid email address"
    if error_type in _INT_ERRORS:
        return f"{name} must be an integer"
    if error_type in _BOOL_ERRORS:
        return f"{name} must be a boolean"
    if error_type == "greater_than_equal":
        if ctx.get("ge") == 0:
            return f"{name} cannot be negative"
        return f"{name} must be at least {ctx.get('ge')}"
    if error_type == "less_than_equal":
        if name in _AMOUNT_FIELDS:
            return f"{name} cannot exceed {ctx.get('le'):,}"
        return f"{name} must be at most {ctx.get('le')}"
    if error_type in _OBJECT_ERRORS:
        return f"{name} must be an object"
    return f"{name} is invalid: {error.get('msg', '')}"


def format_grpc_violations(errors: Sequence[Dict[str, Any]]) -> List[str]:
    """渲染为 ``<点分路径>: <消息>``，嵌套字段以点号拼接（如 data.username）。"""
    violations: List[str] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        path = ".".join(loc) if loc else "request"
        name = loc[-1] if loc else "request"
        violations.append(f"{path}: {_grpc_message(name, error)}")
    return violations


# ---------- REST ----------

def _rest_message(base: str, fields: List[str], error: Dict[str, Any]) -> str:
    error_type = error.get("type", "")
    ctx = error.get("ctx") or {}
    path = "/".join([base, *fields])

    if error_type == "missing":
        if not fields:
            return f"{base} is required"
        parent = "/".join([base, *fields[:-1]])
        return f"{parent} must have required property '{fields[-1]}'"
    if error_type == "json_invalid":
        return f"{base} must be valid JSON"
    if error_type == "string_too_short":
        return f"{path} must NOT have fewer than {ctx.get('min_length')} characters"
    if error_type == "string_too_long":
        return f"{path} must NOT have more than {ctx.get('max_length')} characters"
    if error_type == "string_type":
        return f"{path} must be string"
    if error_type == "string_pattern_mismatch":
        if _is_uuid_pattern(ctx):
            return f'{path} must match format "uuid"'
        return f'{path} must match pattern "{ctx.get("pattern")}"'
    if error_type == EMAIL_ERROR_TYPE:
        return f'{path} must match format "email"'
    if error_type in _INT_ERRORS:
        return f"{path} must be integer"
    if error_type in _BOOL_ERRORS:
        return f"{path} must be boolean"
    if error_type == "greater_than_equal":
        return f"{path} must be >= {ctx.get('ge')}"
    if error_type == "less_than_equal":
        return f"{path} must be <= {ctx.get('le')}"
    if error_type in _OBJECT_ERRORS:
        return f"{path} must be object"
    return f"{path} {error.get('msg', 'is invalid')}"


def format_rest_violations(errors: Sequence[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    渲染为 ``{"path", "message", "type"}`` 列表

    pydantic 的 loc 形如 ("body", "full_name")；字段名换算为 camelCase 线上名。
    """
    violations: List[Dict[str, str]] = []
    for error in errors:
        loc = list(error.get("loc", ()))
        location = "body"
        if loc and loc[0] in _REST_LOCATIONS:
            location = loc.pop(0)
        # json_invalid 的 loc 末尾是字符位置（int），不是字段
        fields = [to_camel(part) for part in loc if isinstance(part, str)]
        base = f"request/{_REST_LOCATIONS[location]}"
        violations.append({
            "path": "/".join([base, *fields]),
            "message": _rest_message(base, fields, error),
            "type": str(error.get("type", "")),
        })
    return violations
