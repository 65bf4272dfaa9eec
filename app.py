"""
KerPIC – photo comparison and culling server (FastAPI + Pillow)

Quick start
-----------
1) python -m venv .venv && source .venv/bin/activate  # or .venv\\Scripts\\activate on Windows
2) pip install -e .
3) PHOTOS_DIR=~/Pictures CACHE_DIR=~/.cache/kerpic python app.py 3000
4) Open http://localhost:3000 → pick a folder → select images → Compare → Save kept

Notes
-----
• Thumbnails are cached under CACHE_DIR, one JPEG per image and size.
• Batches live in memory only and are gone after a restart.
• Saving moves the kept files into a subfolder ("saved" by default) next to each image.
"""

import logging
import sys
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import Settings
from errors import KerpicError
from logger_setup import ConfigureLogger
from routes import (
    create_batch,
    get_batch,
    get_folder_contents,
    index,
    list_folders,
    list_images,
    make_jinja_env,
    save_selected,
    spa_fallback,
    thumbnail,
)
from scanner import FolderService
from services import ImageService
from templates_static import ensure_assets

logger = logging.getLogger(__name__)


def kerpic_error_handler(request: Request, exc: KerpicError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": str(exc)}, status_code=exc.status_code)


def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed request bodies are a 400 with a flat error message."""
    messages = [
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}"
        for err in exc.errors()
    ]
    return JSONResponse({"error": "; ".join(messages) or "Invalid request"}, status_code=400)


def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application for the given settings (environment by default)."""
    settings = settings or Settings.from_env()

    app = FastAPI(title="KerPIC")
    app.state.settings = settings
    app.state.folder_service = FolderService(settings.photos_dir)
    app.state.image_service = ImageService(settings.photos_dir, settings.cache_dir)

    # Ensure templates and static files exist
    ensure_assets(settings.frontend_dir)
    app.state.jinja_env = make_jinja_env(settings.frontend_dir / "templates")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["Content-Length"],
    )

    app.add_exception_handler(KerpicError, kerpic_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)

    # Mount static files
    app.mount("/static", StaticFiles(directory=str(settings.frontend_dir / "static")), name="static")

    # API routes
    app.get("/api/folders")(list_folders)
    app.get("/api/folders/{path:path}")(get_folder_contents)
    app.get("/api/images/{folder:path}")(list_images)
    app.get("/api/thumbnail/{path:path}")(thumbnail)
    app.post("/api/batch")(create_batch)
    app.get("/api/batch/{batch_id}")(get_batch)
    app.post("/api/save")(save_selected)

    # Front end, MUST come last so it only catches unmatched paths
    app.get("/", include_in_schema=False)(index)
    app.get("/{full_path:path}", include_in_schema=False)(spa_fallback)

    logger.info("Photos directory: %s", settings.photos_dir)
    logger.info("Cache directory: %s", settings.cache_dir)
    return app


if __name__ == "__main__":
    # Allow `python app.py 3000`
    settings = Settings.from_env()
    ConfigureLogger(
        log_dir=str(settings.log_dir) if settings.log_dir else None,
        console_level=settings.log_level,
    )
    port = int(sys.argv[1]) if len(sys.argv) > 1 else settings.port
    logger.info("Starting KerPIC server on port %d", port)
    import uvicorn

    uvicorn.run("app:create_app", factory=True, host=settings.host, port=port)
