import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from armenu.core.config import settings
from armenu.core.database import create_engine, create_session_factory
from armenu.core.errors import register_exception_handlers
from armenu.core.logging import configure_logging
from armenu.services.record_store import InMemoryRecordStore, RecordStore
from armenu.services.seed import load_seed_file
from armenu.services.sql_store import SqlRecordStore
from armenu.api.v1 import endpoints

logger = logging.getLogger(__name__)

def build_store() -> RecordStore:
    if settings.STORE_BACKEND == "sql":
        engine = create_engine(settings.DATABASE_URL)
        return SqlRecordStore(create_session_factory(engine))
    return InMemoryRecordStore()

def create_app(store: Optional[RecordStore] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if store is None:
            app.state.store = build_store()
            if settings.SEED_FILE:
                await load_seed_file(app.state.store, settings.SEED_FILE)
        logger.info("Using %s", type(app.state.store).__name__)
        yield

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    if store is not None:
        app.state.store = store

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Health check
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "version": settings.VERSION}

    app.include_router(endpoints.router, prefix=settings.API_V1_STR)
    return app

configure_logging()
app = create_app()
