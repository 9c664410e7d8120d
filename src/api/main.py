"""FastAPI application entry point."""

import logging
import tomllib
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from dotenv import load_dotenv

# Load environment variables from .env file
# Must be called before the settings are read
load_dotenv()

from api.dependencies import get_settings
from api.error_handlers import register_error_handlers
from api.routes import health, users
from adapter.mongodb.connection import get_mongodb_client, reset_client
from adapter.mongodb.user_repository import MongoUserRepository
from utils.logging import setup_structured_logging

settings = get_settings()

# Set up structured JSON logging
setup_structured_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Read version from pyproject.toml (single source of truth)
# main.py is at <root>/src/api/main.py
_project_root = Path(__file__).parent.parent.parent
with open(_project_root / "pyproject.toml", "rb") as f:
    VERSION = tomllib.load(f)["project"]["version"]

SERVICE_NAME = "Users Core API"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown logic."""
    if settings.storage_backend == 'mongodb':
        client = get_mongodb_client(settings)
        if client:
            if MongoUserRepository(client[settings.mongo_database]).ensure_indexes():
                logger.info("MongoDB indexes verified/created successfully")
            else:
                logger.warning("Failed to create some MongoDB indexes")
        else:
            logger.warning("MongoDB unavailable, skipping index creation")
    else:
        logger.info("Using in-memory user storage")

    yield  # App runs here

    reset_client()


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="User management API: create and fetch users through ports and adapters",
    version=VERSION,
    lifespan=lifespan,
)

# With a wildcard origin, browsers refuse credentials, so only allow them for explicit origins
cors_origins = settings.cors_origin_list
if not cors_origins:
    logger.warning(
        "CORS configured with wildcard origin ('*'). "
        "For production, set CORS_ORIGINS to specific domains (e.g., 'https://app.example.com')"
    )
else:
    logger.info(f"CORS configured with specific origins: {cors_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins or ["*"],
    allow_credentials=bool(cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Register routes
app.include_router(users.router)
app.include_router(health.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    # Application logs go through structured logging; uvicorn's access log stays off
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        access_log=False
    )
