"""Error kinds raised by the product store and how they map onto HTTP."""
import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ProductStoreError(Exception):
    """Abstract base, never raised itself: each subclass sets its kind and HTTP status."""
    kind: str
    status_code: int

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_envelope(self) -> Dict[str, Any]:
        return {"error": {"kind": self.kind, "message": self.message}}


class MalformedBodyError(ProductStoreError):
    kind = "malformed_body"
    status_code = 400


class InvalidIdError(ProductStoreError):
    kind = "invalid_id"
    status_code = 400

    def __init__(self, message: str = "Invalid ID format"):
        super().__init__(message)


class ProductNotFoundError(ProductStoreError):
    kind = "not_found"
    status_code = 404

    def __init__(self, message: str = "Product not found"):
        super().__init__(message)


class StorageError(ProductStoreError):
    kind = "storage_error"
    status_code = 500


class DatabaseConnectionError(Exception):
    """The database could not be reached at startup."""
    pass


# ---------------------------
# FastAPI exception handlers
# ---------------------------
def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "malformed request body"


async def product_store_error_handler(request: Request, exc: ProductStoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_envelope())


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = MalformedBodyError(_format_validation_errors(exc))
    return JSONResponse(status_code=err.status_code, content=err.to_envelope())


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ProductStoreError, product_store_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
