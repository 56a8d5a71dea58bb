"""
全局异常处理

ValidationError -> 400, ConflictError -> 409, NotFoundError -> 404,
其他异常 -> 500（不向调用方暴露内部细节）
"""
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ..exceptions import CatalogException, ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

_STATUS_CODES = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConflictError, status.HTTP_409_CONFLICT),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
)


def _status_for(exc: CatalogException) -> int:
    for exc_type, status_code in _STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, exc_name: str, detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": exc_name, "detail": detail},
    )


def register_error_handlers(app: FastAPI) -> None:
    """注册全局异常处理器"""

    @app.exception_handler(CatalogException)
    async def catalog_exception_handler(request: Request, exc: CatalogException):
        status_code = _status_for(exc)
        logger.warning(f"{request.method} {request.url.path} -> {status_code}: {exc.message}")
        return _error_response(status_code, type(exc).__name__, exc.message)

    @app.exception_handler(Exception)
    async def unexpected_exception_handler(request: Request, exc: Exception):
        logger.exception(f"{request.method} {request.url.path} 处理失败: {exc}")
        return _error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "InternalServerError",
            "Internal server error",
        )
