"""FastAPI application factory."""
from __future__ import annotations
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from findash.config import Settings, settings as default_settings
from findash.domain.exceptions import NotFoundError, DatasetValidationError
from findash.logging import logger, setup_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from findash.generator.pool import WorkerPool
        from findash.services.dataset_service import DatasetService
        setup_logging(settings.LOG_LEVEL)
        pool = WorkerPool(kind=settings.METRIC_EXECUTOR, workers=settings.METRIC_WORKERS)
        pool.start()
        app.state.dataset_service = DatasetService(pool, settings)
        try:
            yield
        finally:
            pool.shutdown()

    app = FastAPI(
        title="Finance Dashboard API",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(GZipMiddleware, minimum_size=settings.GZIP_MIN_SIZE)

    @app.middleware("http")
    async def _cache_control(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("Cache-Control", settings.CACHE_CONTROL)
        return response

    # Import routers inside create_app() to avoid circular imports at module load time
    from findash.api.routers.metrics import router as metrics_router
    from findash.api.routers.rows import router as rows_router
    from findash.api.routers.dashboard import router as dashboard_router

    app.include_router(metrics_router)
    app.include_router(rows_router)
    app.include_router(dashboard_router)

    @app.exception_handler(NotFoundError)
    def _not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": exc.message})

    @app.exception_handler(DatasetValidationError)
    def _invalid(request: Request, exc: DatasetValidationError) -> JSONResponse:
        logger.warning("Rejected request %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=422, content={"detail": exc.message})

    @app.get("/health", tags=["ops"])
    def health() -> dict:
        return {"status": "ok"}

    return app
