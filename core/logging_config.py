"""
Structlog 日志配置

structlog 与标准库 logging 共用一条处理链：业务代码用 structlog 打结构化事件，
uvicorn / grpc 的标准库日志经 ``ProcessorFormatter`` 走同样的渲染。

- 开发环境（DEBUG）输出彩色控制台格式，其余环境输出单行 JSON
- 每条日志带上服务名与环境，便于 REST 与 gRPC 两个入口的日志汇总
- 邮箱等敏感字段在渲染前统一脱敏，请求体日志也复用同一规则
"""
import json
import logging
from typing import Any, List, Optional

import structlog
from structlog.contextvars import merge_contextvars
from structlog.dev import ConsoleRenderer
from structlog.processors import JSONRenderer, TimeStamper, add_log_level
from structlog.stdlib import ProcessorFormatter
from structlog.types import EventDict, Processor

from core.config import settings


# 日志中需要脱敏的字段（大小写不敏感）
SENSITIVE_KEYS = frozenset({"email"})
MASK = "***"

# 请求日志由 LoggingMiddleware 记录，uvicorn access 与 grpc 内部日志只保留告警
_QUIET_LOGGERS = {"uvicorn.access": logging.WARNING, "grpc": logging.WARNING}


def redact(data: Any) -> Any:
    """递归替换 dict/list 中敏感字段的值，返回新对象"""
    if isinstance(data, dict):
        return {
            k: (MASK if str(k).lower() in SENSITIVE_KEYS else redact(v))
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [redact(v) for v in data]
    return data


def redact_sensitive_fields(_, __, event_dict: EventDict) -> EventDict:
    return redact(event_dict)


def add_service_info(_, __, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", settings.PROJECT_NAME)
    event_dict.setdefault("environment", settings.ENVIRONMENT)
    return event_dict


def resolve_log_level() -> int:
    """LOG_LEVEL 优先；未配置时 DEBUG 模式为 DEBUG，否则 INFO"""
    if settings.LOG_LEVEL:
        level = logging.getLevelName(settings.LOG_LEVEL.upper())
        if isinstance(level, int):
            return level
    return logging.DEBUG if settings.DEBUG else logging.INFO


def use_json_output() -> bool:
    if settings.LOG_JSON is not None:
        return settings.LOG_JSON
    return not settings.DEBUG


def build_renderer() -> Processor:
    if not use_json_output():
        return ConsoleRenderer(colors=True)

    # structlog 会向 serializer 传入 default 等参数
    def _dumps(obj, default=None, **kwargs):
        return json.dumps(obj, ensure_ascii=False, default=default, **kwargs)

    return JSONRenderer(serializer=_dumps)


def build_processors() -> List[Processor]:
    """structlog 与标准库日志共享的预处理链"""
    return [
        merge_contextvars,
        add_log_level,
        TimeStamper(fmt="iso", utc=True),
        add_service_info,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_sensitive_fields,
    ]


def configure_logging() -> None:
    """配置 structlog，并把根 logger 的输出交给 ProcessorFormatter；可重复调用"""
    pre_chain = build_processors()

    structlog.configure(
        processors=[*pre_chain, ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler()
    handler.setFormatter(
        ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[ProcessorFormatter.remove_processors_meta, build_renderer()],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(resolve_log_level())

    for name, level in _QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(level, resolve_log_level()))


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_error_safely(logger: structlog.stdlib.BoundLogger, event: str, **fields: Any) -> None:
    """记录错误日志；日志链路本身出错时退回标准库，不影响响应"""
    try:
        logger.error(event, **fields)
    except Exception:
        logging.getLogger("catalog.errors").error("%s %r", event, redact(fields))
