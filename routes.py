"""FastAPI routes for KerPIC."""
from pathlib import Path

from fastapi import Depends, HTTPException, Request
from fastapi.responses import FileResponse, HTMLResponse, JSONResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape

from models import BatchRequest, BatchResponse, FolderInfo, ImageInfo, SaveRequest, SaveResult
from scanner import FolderService
from services import ImageService
from thumbnails import DEFAULT_THUMB_SIZE, clamp_size


def get_folder_service(request: Request) -> FolderService:
    return request.app.state.folder_service


def get_image_service(request: Request) -> ImageService:
    return request.app.state.image_service


def render(request: Request, name: str, **ctx) -> HTMLResponse:
    """Render a front-end template with context."""
    jinja_env: Environment = request.app.state.jinja_env
    ctx.setdefault("title", "KerPIC")
    ctx.setdefault("default_size", DEFAULT_THUMB_SIZE)
    return HTMLResponse(jinja_env.get_template(name).render(**ctx))


def make_jinja_env(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=select_autoescape(["html", "xml"]),
    )


def index(request: Request):
    """Front-end entry page."""
    return render(request, "index.html")


def spa_fallback(request: Request, full_path: str):
    """Serve the entry page for client-side routes, JSON 404 for unknown API paths."""
    if full_path == "api" or full_path.startswith("api/"):
        return JSONResponse({"error": f"Not found: /{full_path}"}, status_code=404)
    return render(request, "index.html")


def list_folders(folders: FolderService = Depends(get_folder_service)) -> list[FolderInfo]:
    """Root folder with its direct subfolders and images."""
    return folders.list_folders()


def get_folder_contents(path: str, folders: FolderService = Depends(get_folder_service)) -> FolderInfo:
    return folders.list_contents(path.lstrip("/"))


def list_images(folder: str, images: ImageService = Depends(get_image_service)) -> list[ImageInfo]:
    """Resolved metadata for every image directly inside folder."""
    return images.list_images(folder.lstrip("/"))


def thumbnail(path: str, size: str = str(DEFAULT_THUMB_SIZE), images: ImageService = Depends(get_image_service)):
    """Generate (or reuse) and serve a JPEG thumbnail."""
    thumb_path = images.generate_thumbnail(path.lstrip("/"), clamp_size(size))
    return FileResponse(thumb_path, media_type="image/jpeg")


def create_batch(body: BatchRequest, images: ImageService = Depends(get_image_service)) -> BatchResponse:
    batch_id, resolved = images.create_batch(body.image_paths)
    return BatchResponse(id=batch_id, images=resolved)


def get_batch(batch_id: str, images: ImageService = Depends(get_image_service)) -> BatchResponse:
    resolved = images.get_batch(batch_id)
    if resolved is None:
        raise HTTPException(404, f"Batch not found: {batch_id}")
    return BatchResponse(id=batch_id, images=resolved)


def save_selected(body: SaveRequest, images: ImageService = Depends(get_image_service)) -> SaveResult:
    """Move the selected images into the target subfolder."""
    return images.save_selected(body.batch_id, body.selected_paths, body.target_folder)
