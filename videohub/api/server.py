"""
FastAPI Server for the VideoHub service.

Builds the application, owns the storage lifecycle through the lifespan hook,
and converts every raised error into the standard error envelope.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from ..core.config import Config
from ..core.errors import ApiError
from ..core.logging_config import get_error_tracker
from ..storage.manager import StorageManager
from .middleware import TrustedHeaderAuthMiddleware
from .models import ErrorResponse, HealthResponse


API_PREFIX = "/api/v1"


def error_json(status_code: int, message: str, errors: Optional[list] = None) -> JSONResponse:
    body = ErrorResponse(status_code=status_code, message=message, errors=errors or [])
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, mode="json"))


class APIServer:
    """FastAPI server for the VideoHub service"""

    def __init__(self, config: Config, video_module, storage_manager: Optional[StorageManager] = None):
        self.config = config
        self.video_module = video_module
        self.storage_manager = storage_manager
        self.logger = logging.getLogger(__name__)
        self.error_tracker = get_error_tracker("api_server")

        self.server_start_time = datetime.now()

        self.app = FastAPI(
            title="VideoHub API",
            description="Video publishing and discovery API",
            version="1.0.0",
            lifespan=self._lifespan,
        )

        self.app.add_middleware(CORSMiddleware, allow_origins=self.config.system.cors_origins, allow_credentials=True, allow_methods=["*"], allow_headers=["*"])
        if self.config.system.trust_user_header:
            self.app.add_middleware(TrustedHeaderAuthMiddleware)

        self._setup_exception_handlers()
        self._setup_routes()

    @asynccontextmanager
    async def _lifespan(self, app: FastAPI):
        if self.storage_manager is not None:
            await self.storage_manager.connect()
        self.logger.info(f"API server ready: {self.get_server_info()}")
        try:
            yield
        finally:
            if self.storage_manager is not None:
                await self.storage_manager.close()
            self.logger.info("API server shut down")

    def _setup_exception_handlers(self):
        """Funnel every error through the error envelope"""

        @self.app.exception_handler(ApiError)
        async def handle_api_error(request: Request, exc: ApiError):
            if exc.status_code >= 500:
                self.logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
            else:
                self.logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
            return error_json(exc.status_code, exc.message, exc.errors)

        @self.app.exception_handler(RequestValidationError)
        async def handle_validation_error(request: Request, exc: RequestValidationError):
            errors = [{"field": ".".join(str(part) for part in err.get("loc", ())), "message": err.get("msg", "")} for err in exc.errors()]
            return error_json(400, "Invalid request parameters", errors)

        @self.app.exception_handler(StarletteHTTPException)
        async def handle_http_error(request: Request, exc: StarletteHTTPException):
            return error_json(exc.status_code, str(exc.detail))

        @self.app.exception_handler(Exception)
        async def handle_unexpected_error(request: Request, exc: Exception):
            self.error_tracker.log_error(exc, f"{request.method} {request.url.path}")
            return error_json(500, "Internal server error")

    def _setup_routes(self):
        """Setup API routes"""

        @self.app.get("/health", response_model=HealthResponse)
        async def health_check():
            if self.storage_manager is not None:
                database = await self.storage_manager.get_status()
            else:
                database = {"backend": self.config.database.backend, "connected": True}
            return HealthResponse(status="healthy", timestamp=datetime.now().isoformat(), database=database)

        self.app.include_router(self.video_module.get_api_routes(), prefix=API_PREFIX)

    def run(self) -> None:
        """Run the uvicorn server (blocking)"""
        self.logger.info(f"Starting API server on {self.config.system.api_host}:{self.config.system.api_port}")
        uvicorn.run(self.app, host=self.config.system.api_host, port=self.config.system.api_port, log_level=self.config.system.log_level.lower())

    def get_server_info(self) -> Dict[str, Any]:
        """Get server information"""
        return {"host": self.config.system.api_host, "port": self.config.system.api_port, "start_time": self.server_start_time.isoformat(), "uptime_seconds": (datetime.now() - self.server_start_time).total_seconds(), **self.video_module.get_module_status()}
