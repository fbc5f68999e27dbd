import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from .auth.gate import AuthorizationGate
from .auth.matrix import build_default_matrix
from .config import settings
from .database import engine
from .errors import (
    SAFE_HTTP_MESSAGES,
    AppError,
    ConfigurationError,
    ConflictError,
    InternalError,
    ValidationError,
    error_payload,
)
from .routers import audit, auth, invoices, properties, tenants, users, vendors, work_orders


def _resolve_log_level(value: str) -> int:
    level = logging.getLevelName(value.upper())
    return level if isinstance(level, int) else logging.INFO


log_level = _resolve_log_level(settings.log_level)

if not logging.getLogger().handlers:
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
logger = logging.getLogger("ultrabms")
logger.setLevel(log_level)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting application")
    if settings.debug:
        logger.warning("DEBUG=true, do not use in production")

    yield

    await engine.dispose()


app = FastAPI(title=settings.app_name, debug=settings.debug, lifespan=lifespan)

# Built once; a bad grant table stops the process here
app.state.authorization_gate = AuthorizationGate(build_default_matrix())


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"],
    allow_headers=["*"],
    expose_headers=[REQUEST_ID_HEADER],
)
app.add_middleware(RequestIdMiddleware)

api_router = APIRouter(prefix="/api/v1")
for router in (
    auth.router,
    users.router,
    properties.router,
    tenants.router,
    work_orders.router,
    vendors.router,
    invoices.router,
    audit.router,
):
    api_router.include_router(router)
app.include_router(api_router)


def _request_id(request: Request) -> str:
    request_id = getattr(request.state, "request_id", None)
    if request_id is None:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
    return request_id


def _error_response(request: Request, status_code: int, message: str) -> JSONResponse:
    request_id = _request_id(request)
    return JSONResponse(
        status_code=status_code,
        content=error_payload(status_code, message, request.url.path, request_id),
        headers={REQUEST_ID_HEADER: request_id},
    )


def _log_error(request: Request, status_code: int, code: str, message: str, exc: Exception | None = None) -> None:
    log_message = f"[{code}] path={request.url.path} request_id={_request_id(request)} message={message}"
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(log_message, exc_info=exc)
    else:
        logger.warning(log_message)


@app.exception_handler(AppError)
async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    _log_error(request, exc.status_code, exc.code, exc.message, exc)
    return _error_response(request, exc.status_code, exc.message)


@app.exception_handler(HTTPException)
async def handle_http_exception(
    request: Request, exc: HTTPException | StarletteHTTPException
) -> JSONResponse:
    safe_message = SAFE_HTTP_MESSAGES.get(
        exc.status_code,
        InternalError.message if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else "Request failed",
    )
    detail_message = exc.detail if isinstance(exc.detail, str) else ""
    _log_error(request, exc.status_code, f"HTTP_{exc.status_code}", detail_message.strip() or safe_message)
    return _error_response(request, exc.status_code, safe_message)


@app.exception_handler(StarletteHTTPException)
async def handle_starlette_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return await handle_http_exception(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = "Request validation failed"
    _log_error(request, status.HTTP_422_UNPROCESSABLE_ENTITY, ValidationError.code, message)
    return _error_response(request, status.HTTP_422_UNPROCESSABLE_ENTITY, message)


@app.exception_handler(IntegrityError)
async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    message = "Request could not be completed due to a conflict"
    _log_error(request, status.HTTP_409_CONFLICT, ConflictError.code, message)
    return _error_response(request, status.HTTP_409_CONFLICT, message)


@app.exception_handler(ConfigurationError)
async def handle_configuration_error(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    _log_error(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "CONFIGURATION_ERROR",
        str(exc),
        exc,
    )
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.message)


@app.exception_handler(Exception)
async def handle_unhandled_exception(
    request: Request, exc: Exception
) -> JSONResponse:
    _log_error(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        InternalError.code,
        InternalError.message,
        exc,
    )
    return _error_response(request, status.HTTP_500_INTERNAL_SERVER_ERROR, InternalError.message)


@app.get("/health", tags=["health"])
async def healthcheck() -> Response:
    try:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error("Healthcheck database probe failed: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"status": "error"}
        )

    return JSONResponse(status_code=status.HTTP_200_OK, content={"status": "ok"})
