"""
Main application entry point for the Contacts API.

This module configures logging, initializes the FastAPI application,
applies the CORS policy, installs the error-to-status mapping and
includes the contacts router. Tables are created on startup.

Modules:
- FastAPI: Web framework
- CORSMiddleware: Middleware for handling CORS
- contact_api.database: Database engine
- contact_api.models: SQLAlchemy models
- contact_api.contacts: Contacts router
- contact_api.errors: Exception handlers
- contact_api.core: Application settings
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from contact_api.database import engine
from contact_api import models, contacts
from contact_api.core import (
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    CORS_EXPOSED_HEADERS,
    configure_logging,
    get_settings,
)
from contact_api.errors import register_exception_handlers

settings = get_settings()
configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create database tables before serving requests.

    There are no migrations; the single ``contacts`` table is created
    if it does not exist yet.
    """
    models.Base.metadata.create_all(bind=engine)
    logger.info("Contacts API started with database %s", engine.url)
    yield


# Initialize FastAPI application
app = FastAPI(title="Contacts API", lifespan=lifespan)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.CORS_ORIGIN],
    allow_credentials=True,
    allow_methods=CORS_ALLOWED_METHODS,
    allow_headers=CORS_ALLOWED_HEADERS,
    expose_headers=CORS_EXPOSED_HEADERS,
)

register_exception_handlers(app)

app.include_router(contacts.router)


@app.get("/")
def root():
    """
    Root endpoint for the API.

    Returns a simple JSON message directing users to the Swagger UI.

    Returns:
        dict: JSON message with information about the API
    """
    return {"msg": "Contacts API. Visit /docs for Swagger UI"}
