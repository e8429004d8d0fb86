import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MenuError(Exception):
    """Base class for every error the menu core reports to its callers.

    ``reason`` is the stable machine-readable kind; the HTTP layer renders it
    as ``{"error": reason, "detail": message}`` with ``status_code``.
    """

    reason = "MenuError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Menu error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingIdentifier(MenuError):
    reason = "MissingIdentifier"
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Restaurant identifier required (restaurant_id, r or domain)"


class RestaurantNotFound(MenuError):
    reason = "RestaurantNotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Restaurant not found"


class RestaurantInactive(MenuError):
    reason = "RestaurantInactive"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Restaurant is temporarily unavailable"


class ItemNotFound(MenuError):
    reason = "ItemNotFound"
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Item not found"


class MenuValidationError(MenuError):
    reason = "ValidationError"
    status_code = 422
    default_message = "Invalid menu data"


class DuplicateItem(MenuError):
    reason = "DuplicateItem"
    status_code = status.HTTP_409_CONFLICT
    default_message = "An entry with this name already exists for the restaurant"


class StoreUnavailable(MenuError):
    reason = "StoreUnavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = "Menu storage is unavailable"


class Forbidden(MenuError):
    reason = "Forbidden"
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Not allowed to manage this restaurant"


def error_body(reason: str, detail) -> dict:
    return {"error": reason, "detail": detail}


async def menu_error_handler(request: Request, exc: MenuError) -> JSONResponse:
    if isinstance(exc, StoreUnavailable):
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.reason, exc.message))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    detail = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=MenuValidationError.status_code,
        content=error_body(MenuValidationError.reason, detail),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("InternalError", "Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MenuError, menu_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
