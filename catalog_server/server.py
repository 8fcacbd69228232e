"""FastAPI server for the item catalog."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse

from itemdb.catalog import ItemCatalog
from itemdb.config import Settings, build_catalog, load_settings
from itemdb.core.deadline import Deadline
from itemdb.core.errors import (
    CatalogError,
    DeadlineExceeded,
    NotFoundError,
    StorageError,
    ValidationError,
)

from .schemas import HealthResponse, ItemListResponse, ItemResponse, MessageResponse

logger = logging.getLogger(__name__)

STATUS_CODES = [
    (ValidationError, 400),
    (NotFoundError, 404),
    (DeadlineExceeded, 504),
    (StorageError, 500),
]


def status_for(exc: CatalogError) -> int:
    for exc_type, status in STATUS_CODES:
        if isinstance(exc, exc_type):
            return status
    return 500


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_catalog(request: Request) -> ItemCatalog:
    return request.app.state.catalog


def get_deadline(request: Request) -> Deadline:
    """A fresh deadline per request, from the configured timeout."""
    return Deadline(request.app.state.settings.request_timeout)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Opening %s store", settings.backend)
        app.state.catalog = build_catalog(settings)
        try:
            yield
        finally:
            app.state.catalog.close()
            logger.info("Store closed")

    app = FastAPI(
        title="Item Catalog",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.front_url],
        allow_methods=["GET", "PUT", "POST", "DELETE"],
    )

    @app.exception_handler(CatalogError)
    async def catalog_error_handler(request: Request, exc: CatalogError):
        status = status_for(exc)
        if status >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status, content={"message": str(exc)})

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------

    @app.get("/", response_model=MessageResponse)
    def root():
        return MessageResponse(message="Hello, world!")

    @app.get("/health", response_model=HealthResponse)
    def health():
        return HealthResponse()

    @app.post("/items", response_model=ItemResponse)
    def add_item(
        name: str = Form(""),
        category: str = Form(""),
        image: Optional[UploadFile] = File(None),
        catalog: ItemCatalog = Depends(get_catalog),
        deadline: Deadline = Depends(get_deadline),
    ):
        if image is None:
            raise ValidationError("Image not found: no image was uploaded")

        staged = catalog.images.stage(image.file)
        try:
            item = catalog.add_item(name, category, staged, deadline)
        finally:
            catalog.images.discard(staged)
        return ItemResponse.from_item(item)

    @app.get("/items", response_model=ItemListResponse)
    def list_items(
        catalog: ItemCatalog = Depends(get_catalog),
        deadline: Deadline = Depends(get_deadline),
    ):
        return ItemListResponse.from_items(catalog.list_all(deadline))

    @app.get("/items/{position}", response_model=ItemResponse)
    def get_item(
        position: str,
        catalog: ItemCatalog = Depends(get_catalog),
        deadline: Deadline = Depends(get_deadline),
    ):
        return ItemResponse.from_item(catalog.get_by_position(position, deadline))

    @app.get("/search", response_model=ItemListResponse)
    def search_items(
        keyword: str = "",
        catalog: ItemCatalog = Depends(get_catalog),
        deadline: Deadline = Depends(get_deadline),
    ):
        return ItemListResponse.from_items(catalog.search(keyword, deadline))

    @app.get("/image/{image_filename}")
    def get_image(image_filename: str, catalog: ItemCatalog = Depends(get_catalog)):
        return FileResponse(catalog.images.resolve(image_filename), media_type="image/jpeg")

    return app


app = create_app()
