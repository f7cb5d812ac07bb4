from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError, StoreError, ValidationError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _error_response(*, status_code: int, detail: Any, error_code: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={'detail': detail, 'error_code': error_code}
    )


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    return _error_response(
        status_code=error.status_code, detail=error.message, error_code=error.error_code
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return _error_response(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=[
            {'loc': list(err.get('loc', ())), 'msg': err.get('msg', '')}
            for err in error.errors()
        ],
        error_code=ValidationError.error_code,
    )


async def store_error_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'💥 [STORE] {request.method} {request.url.path} failed: {exc!r}')
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=StoreError().message,
        error_code=StoreError.error_code,
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return _error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail='Internal server error',
        error_code='internal_error',
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    RequestValidationError: validation_error_handler,
    SQLAlchemyError: store_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
