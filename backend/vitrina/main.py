from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from vitrina.core.config import Settings, settings as default_settings, setup_logging
from vitrina.services.store import CatalogStore
from vitrina.services.storage import ObjectStorage
from vitrina.api.deps import check_jwt_settings
from vitrina.api import (
    auth,
    catalog,
    categories,
    products,
    promotions,
    site,
    checkout,
    media,
    admin_categories,
    admin_products,
)
import logging

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[CatalogStore] = None,
    storage: Optional[ObjectStorage] = None,
) -> FastAPI:
    settings = settings or default_settings
    check_jwt_settings(settings)
    store = store or CatalogStore.from_url(settings.DATABASE_URL)
    storage = storage or ObjectStorage(
        settings.STORAGE_DIR,
        settings.STORAGE_BUCKET,
        settings.STORAGE_PUBLIC_URL,
        settings.MAX_UPLOAD_IMAGE_SIZE,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(settings.LOG_LEVEL)
        store.start()
        storage.start()
        logger.info("Vitrina API started (env=%s)", settings.ENV)
        yield
        store.stop()

    app = FastAPI(
        title="Vitrina API",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.store = store
    app.state.storage = storage

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers - all already have /api prefix
    app.include_router(auth.router)
    app.include_router(catalog.router)
    app.include_router(categories.router)
    app.include_router(products.router)
    app.include_router(promotions.router)
    app.include_router(promotions.admin_router)
    app.include_router(site.router)
    app.include_router(site.admin_router)
    app.include_router(checkout.router)
    app.include_router(media.router)
    app.include_router(admin_categories.router)
    app.include_router(admin_categories.subcategories_router)
    app.include_router(admin_products.router)

    # Archivos públicos del bucket (el directorio se crea en storage.start)
    app.mount(
        storage.public_base,
        StaticFiles(directory=storage.root_dir, check_dir=False),
        name="storage"
    )

    @app.get("/")
    def root():
        return {"status": "ok", "service": "vitrina-api"}

    @app.get("/api/health")
    def health_check():
        return {
            "status": "healthy",
            "env": settings.ENV
        }

    return app


app = create_app()
