"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from ddtrace import patch_all
from fastapi import FastAPI
from sqlmodel import SQLModel

from .dependencies import get_config, get_engine, get_storage
from .logging import setup_logging
from .routes import dreams_router

patch_all()

logger = setup_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = get_config()
    SQLModel.metadata.create_all(get_engine())
    storage = get_storage()
    storage.ensure_bucket_exists(config.minio.audio_bucket_name)
    storage.ensure_bucket_exists(config.minio.image_bucket_name)
    logger.info("Dream analyzer started")
    yield


app = FastAPI(title="Dream Analyzer", lifespan=lifespan)
app.include_router(dreams_router)
