import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, Response
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.utils.errors import AppError, InternalError, NotFoundError, ValidationError


logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_MESSAGE = "El servicio de datos no está disponible, intenta nuevamente"


def is_api_path(request: Request) -> bool:
    return request.url.path.startswith("/api/")


def _page(request: Request, name: str, status_code: int) -> Response:
    public_dir: Path = request.app.state.public_dir
    return FileResponse(public_dir / name, status_code=status_code)


def _json(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_output())


async def app_error_handler(request: Request, exc: AppError) -> Response:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _json(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> Response:
    # Malformed JSON or wrongly typed fields
    errors = [
        {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg", "")}
        for err in exc.errors()
    ]
    return _json(ValidationError("La solicitud no es válida", errors=errors))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == 404:
        if is_api_path(request):
            return _json(NotFoundError())
        return _page(request, "404.html", 404)
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


async def store_error_handler(request: Request, exc: PyMongoError) -> Response:
    logger.exception("Store failure on %s %s", request.method, request.url.path)
    if is_api_path(request):
        return _json(InternalError(STORE_UNAVAILABLE_MESSAGE))
    return _page(request, "500.html", 500)


async def unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if is_api_path(request):
        return _json(InternalError())
    return _page(request, "500.html", 500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(PyMongoError, store_error_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
