from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, InternalError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _error_body(*, message: str, kind: str, details: Any = None) -> dict[str, Any]:
    return {'detail': message, 'kind': kind, 'details': jsonable_encoder(details)}


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else InternalError(str(exc))
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(message=error.message, kind=error.kind, details=error.details),
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(message=str(exc), kind='ValidationError'),
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            message='Invalid input data', kind='ValidationError', details=error.errors()
        ),
    )


async def integrity_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.warning(f'⚠️ [DB] Integrity violation on {request.url.path}: {exc}')
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=_error_body(message='Duplicate field value entered', kind='ConflictError'),
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if not getattr(exc, '_has_logged', False):
        Logger.base.opt(exception=exc).error(f'💥 [API] Unhandled error on {request.url.path}')
    error = InternalError('Internal server error')
    return JSONResponse(
        status_code=error.status_code,
        content=_error_body(message=error.message, kind=error.kind, details=error.details),
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    IntegrityError: integrity_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
