from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel

from spa_auth.core.config import settings
from spa_auth.api.v1.api import api_router
from spa_auth.core.error_handler import setup_error_handlers
from spa_auth.core.logging import RequestLoggingMiddleware, setup_logging

setup_logging()
logger = logging.getLogger(__name__)

class HealthResponse(BaseModel):
    status: str

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle startup and shutdown events.
    """
    logger.info("Starting up application...")
    if not settings.JWT_ACCESS_SECRET_KEY:
        logger.warning("JWT_ACCESS_SECRET_KEY is not set; access token issuance will fail")
    yield
    logger.info("Shutting down application...")

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="""
    Token issuance and verification for single-page applications.

    ## Authentication

    * Access and refresh JWTs signed with independent secrets
    * Access tokens can be delivered as two cookies: a readable
      `header.payload` cookie and an HttpOnly `signature` cookie
    * Refresh tokens are exchanged at `/auth/refresh` or `/auth/cookies`

    ## Error Handling

    * 400: Bad Request - Token configuration missing
    * 401: Unauthorized - Missing, invalid or expired token
    * 422: Validation error
    * 500: Internal Server Error
    """,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs" if settings.SHOW_DOCS else None,
    redoc_url=f"{settings.API_V1_STR}/redoc" if settings.SHOW_DOCS else None,
    lifespan=lifespan
)

if settings.BACKEND_CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(RequestLoggingMiddleware)

setup_error_handlers(app)

app.include_router(api_router, prefix=settings.API_V1_STR)

def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description=app.description,
        routes=app.routes,
    )
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "bearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        }
    }
    openapi_schema["security"] = [{"bearerAuth": []}]

    app.openapi_schema = openapi_schema
    return app.openapi_schema

app.openapi = custom_openapi

@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check"
)
async def health() -> HealthResponse:
    """Liveness probe."""
    return HealthResponse(status="ok")
