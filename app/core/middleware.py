from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config.settings import settings
from app.core.logging_config import mask_code
import re
import time
import logging

logger = logging.getLogger(__name__)

# Rutas que llevan un código de acceso en la URL
_CODE_IN_PATH = re.compile(r"(/codigos-acceso/validar/|/accesos-temporales/acceder/)([^/]+)")


def loggable_path(path: str) -> str:
    """Ruta de la petición con el código de acceso enmascarado"""
    return _CODE_IN_PATH.sub(lambda m: m.group(1) + mask_code(m.group(2)), path)


def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin", "X-Requested-With"],
        max_age=3600
    )

    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()

        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        logger.info(
            f"[{settings.app_name}] {request.method} {loggable_path(request.url.path)} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )

        return response
