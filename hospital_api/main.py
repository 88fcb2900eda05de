"""FastAPI application entrypoint."""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from email_service.resend_adapter import ResendMailer
from hospital_api.routers import get_api_router
from hospital_api.services.db import build_admin_client, build_data_client, build_mailer
from hospital_api.services.errors import ApiError
from hospital_api.utils.config import Settings, get_settings
from supabase_service.supabase_adapter import SupabaseAdapter, SupabaseError

LOGGER = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


async def supabase_error_handler(request: Request, exc: SupabaseError) -> JSONResponse:
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    LOGGER.warning("Rejected request body on %s: %s", request.url.path, message)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message or "Invalid request")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # ServerErrorMiddleware re-raises afterwards, so the server logs the traceback.
    LOGGER.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))


def create_app(
    settings: Optional[Settings] = None,
    *,
    data_client: Optional[SupabaseAdapter] = None,
    admin_client: Optional[SupabaseAdapter] = None,
    mailer: Optional[ResendMailer] = None,
) -> FastAPI:
    """Build the application and its shared backend clients."""

    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, version=settings.app_version)
    app.state.settings = settings
    app.state.data_client = data_client if data_client is not None else build_data_client(settings)
    app.state.admin_client = admin_client if admin_client is not None else build_admin_client(settings)
    app.state.mailer = mailer if mailer is not None else build_mailer(settings)

    if not app.state.mailer.enabled:
        LOGGER.info("RESEND_API_KEY not set; confirmation emails are disabled")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(SupabaseError, supabase_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/", response_class=PlainTextResponse)
    def root() -> str:
        """Liveness text."""

        return "Hospital Management System API is running"

    @app.get("/api/health")
    def health_check() -> Dict[str, Any]:
        """Return service health status and the server clock."""

        return {"status": "ok", "server_time": datetime.now(timezone.utc)}

    app.include_router(get_api_router())
    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn on the configured host and port."""

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
