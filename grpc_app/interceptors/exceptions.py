from __future__ import annotations

from typing import Callable, Awaitable
import contextvars

import grpc

from core.logging_config import get_logger, log_error_safely
from grpc_app.interceptors.request_id import get_request_id
from domain.common.exceptions import BusinessException
from shared.codes import BusinessCode


logger = get_logger(__name__)

TRANSPORT = "grpc"
INTERNAL_ERROR_MESSAGE = "Internal server error"

# Mark that the current request has been mapped to a gRPC status
_mapped_error: contextvars.ContextVar[bool] = contextvars.ContextVar("grpc_mapped_error", default=False)


def set_mapped_error() -> None:
    _mapped_error.set(True)


def is_mapped_error() -> bool:
    return bool(_mapped_error.get())


def business_code_to_grpc_status(code: int) -> grpc.StatusCode:
    try:
        bc = BusinessCode(code)
    except ValueError:
        return grpc.StatusCode.INTERNAL

    mapping = {
        BusinessCode.PARAM_VALIDATION_ERROR: grpc.StatusCode.INVALID_ARGUMENT,

        BusinessCode.USER_NOT_FOUND: grpc.StatusCode.NOT_FOUND,
        BusinessCode.PRODUCT_NOT_FOUND: grpc.StatusCode.NOT_FOUND,

        BusinessCode.SYSTEM_ERROR: grpc.StatusCode.INTERNAL,
    }

    return mapping.get(bc, grpc.StatusCode.INTERNAL)


class ExceptionMappingInterceptor(grpc.aio.ServerInterceptor):
    """Convert anything raised by a handler into a gRPC status.

    Business exceptions map by their code; everything else becomes INTERNAL
    with a generic message so internals never leak to the caller.
    """

    async def intercept_service(
        self,
        continuation: Callable[[grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler]],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler:
        handler = await continuation(handler_call_details)
        if handler is None or not handler.unary_unary:
            return handler

        method = handler_call_details.method

        async def _abort(context: grpc.aio.ServicerContext, code: int, error_type: str,
                         status: grpc.StatusCode, reply: str, **log_fields) -> None:
            context.set_trailing_metadata((
                ("x-biz-code", str(int(code))),
                ("x-error-type", error_type),
                ("x-request-id", get_request_id() or ""),
            ))
            set_mapped_error()
            log_error_safely(
                logger,
                "grpc_mapped_error",
                transport=TRANSPORT,
                operation=method,
                code=int(code),
                status=status.name,
                request_id=get_request_id(),
                **log_fields,
            )
            await context.abort(status, reply)

        async def _unary_unary(request, context: grpc.aio.ServicerContext):
            try:
                return await handler.unary_unary(request, context)
            except BusinessException as exc:
                status = business_code_to_grpc_status(exc.code)
                await _abort(
                    context, exc.code, exc.error_type or "BusinessError", status, exc.message,
                    message=exc.message,
                )
            except grpc.aio.AbortError:
                # The handler already aborted with its own status
                raise
            except Exception as exc:
                await _abort(
                    context, BusinessCode.SYSTEM_ERROR, "SystemError", grpc.StatusCode.INTERNAL,
                    INTERNAL_ERROR_MESSAGE,
                    message=str(exc), exception=type(exc).__name__, exc_info=True,
                )

        return grpc.unary_unary_rpc_method_handler(
            _unary_unary,
            request_deserializer=handler.request_deserializer,
            response_serializer=handler.response_serializer,
        )
