import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from api.routers import products
from api.deps import Settings, build_store, get_settings
from api.errors import register_error_handlers
from api.middleware import register_request_logger
from infra.store import ProductStore
from services.catalog import ProductCatalog

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    configure_logging(settings.log_level)
    # store injetado (testes) tem precedência sobre o configurado
    if app.state.store is None:
        app.state.store = build_store(settings)
        log.info("Store inicializado: backend=%s", settings.store_backend)
    if settings.seed_sample_products:
        ProductCatalog(app.state.store).seed()
    yield

def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    app = FastAPI(title="Product Catalog API", lifespan=lifespan)
    app.state.settings = settings or get_settings()
    app.state.store = store

    register_request_logger(app)
    register_error_handlers(app)
    app.include_router(products.router, prefix="/api", tags=["products"])

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello World."

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app

app = create_app()
