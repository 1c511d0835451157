from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from .db.dynamodb.errors import (
    DdbConflict,
    DdbError,
    DdbThrottled,
    DdbUnavailable,
    DdbValidation,
)
from .middleware.access_log import AccessLogMiddleware
from .middleware.request_context import RequestContextMiddleware
from .observability.logging import configure_logging, get_logger
from .problem_details import problem_response
from .routers.graphql_api import build_graphql_router
from .routers.health import router as health_router
from .settings import get_settings


def create_app() -> FastAPI:
    settings = get_settings()

    # Logging must be configured before the app starts handling requests.
    configure_logging(level=settings.log_level)
    log = get_logger("startup")

    app = FastAPI(
        title="Blog Posts GraphQL API",
        version="1.0.0",
        default_response_class=ORJSONResponse,
        redirect_slashes=False,
    )

    log.info("app_starting", settings=settings.to_log_safe_dict())

    # Middlewares (last added is outermost)
    app.add_middleware(AccessLogMiddleware, exclude_paths={"/"})
    allowed_origins = settings.allowed_origins
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        # Browsers reject credentialed requests against a wildcard origin.
        allow_credentials="*" not in allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Requested-With", "X-Request-Id"],
        max_age=3000,
    )
    # Outermost: request context (request-id) wraps everything.
    app.add_middleware(RequestContextMiddleware)

    # Error handlers for non-GraphQL routes; GraphQL reports errors in-band.
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(DdbError, _ddb_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _unhandled_exception_handler)

    # Routes
    app.include_router(health_router)
    app.include_router(build_graphql_router(settings), prefix=settings.graphql_path)

    return app


def _ddb_error_handler(request: Request, exc: DdbError) -> Response:
    # Map storage-layer errors to stable HTTP semantics.
    status_code = 500
    title = "Storage Error"

    if isinstance(exc, DdbValidation):
        status_code = 400
        title = "Bad Request"
    elif isinstance(exc, DdbConflict):
        status_code = 409
        title = "Conflict"
    elif isinstance(exc, (DdbThrottled, DdbUnavailable)):
        status_code = 503
        title = "Service Unavailable"

    extensions = {
        "operation": exc.operation,
        "table": exc.table_name,
        "key": exc.key,
        "awsRequestId": exc.aws_request_id,
        "retryable": bool(exc.retryable),
    }

    return problem_response(
        request=request,
        status_code=status_code,
        title=title,
        detail=str(exc),
        extensions={k: v for k, v in extensions.items() if v is not None},
    )


def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> Response:
    status_code = int(getattr(exc, "status_code", 500) or 500)
    detail = getattr(exc, "detail", None)
    safe_detail = str(detail) if detail is not None else None

    if status_code == 404:
        safe_detail = "Route not found"

    return problem_response(
        request=request,
        status_code=status_code,
        detail=safe_detail,
    )


def _unhandled_exception_handler(request: Request, exc: Exception) -> Response:
    # Operators need the traceback; the response stays generic in production.
    get_logger("unhandled").exception(
        "unhandled_exception",
        request_id=getattr(request.state, "request_id", None),
        http_method=request.method.upper(),
        path=request.url.path,
    )

    return problem_response(
        request=request,
        status_code=500,
        title="Internal Server Error",
        detail=str(exc) if exc else None,
    )
