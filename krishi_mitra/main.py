import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from krishi_mitra.api.rest_routes.analytics import router as analytics_router
from krishi_mitra.api.rest_routes.escalations import router as escalations_router
from krishi_mitra.api.rest_routes.feedback import router as feedback_router
from krishi_mitra.api.rest_routes.query import router as query_router
from krishi_mitra.api.rest_routes.voice import router as voice_router
from krishi_mitra.core.config import settings
from krishi_mitra.services.query_pipeline import AdvisoryPipeline, build_pipeline


def create_app(pipeline: Optional[AdvisoryPipeline] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logging.basicConfig(level=settings.LOG_LEVEL)
        app.state.pipeline = pipeline or build_pipeline(settings)
        yield

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    app.include_router(query_router)
    app.include_router(feedback_router)
    app.include_router(escalations_router)
    app.include_router(analytics_router)
    app.include_router(voice_router)

    @app.get("/")
    async def root():
        return {"message": "Welcome to Krishi Mitra, your farming advisory assistant!"}

    return app


app = create_app()
