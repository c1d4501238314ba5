# pocketcashier/api/errors.py
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from pocketcashier.domain.exceptions import ShopError
from pocketcashier.utils.logging import get_logger

logger = get_logger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def setup_error_handlers(app: FastAPI):
    """Kazdy blad wraca jako {"error": "..."} ze statusem z taksonomii."""

    @app.exception_handler(ShopError)
    async def shop_error_handler(request: Request, exc: ShopError):
        if exc.status_code >= 500:
            logger.error(f"{request.url.path}: {type(exc).__name__}: {exc.message}")
        else:
            logger.info(f"{request.url.path}: {type(exc).__name__}: {exc.message}")
        return _error(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(p) for p in first.get("loc", ())[1:])
        message = f"{field}: {first.get('msg', 'invalid input')}" if field else first.get("msg", "Invalid request body")
        return _error(400, message)

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(f"{request.url.path}: store error: {exc}")
        return _error(500, str(exc))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.error(f"{request.url.path}: unhandled {type(exc).__name__}: {exc}", exc_info=exc)
        return _error(500, str(exc) or "Internal server error")
