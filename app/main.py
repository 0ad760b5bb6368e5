# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the storefront API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.exceptions import (
    BackendUnavailableError,
    StorefrontException,
    storefront_exception_handler,
)
from app.routers import health, products, content, forms, analytics
from app.auth import routes as auth_routes
from lib.supabase_client import SupabaseClientError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Logs the effective configuration on startup. The Supabase client is
    created lazily on first use.
    """
    logger.info(f"Starting storefront API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    if settings.analytics_configured:
        logger.info(f"GA4 analytics enabled for {settings.GA_MEASUREMENT_ID}")
    else:
        logger.warning("GA4 analytics not configured; events will be skipped")

    yield

    logger.info("Shutting down storefront API")


# Create FastAPI application
app = FastAPI(
    title="Wellness Storefront API",
    description="""
## Wellness Storefront API

Backend for the wellness products storefront: catalog, blog, testimonials,
contact and newsletter forms, and visitor analytics.

### Catalog

Products are fetched from the hosted database and then filtered, sorted and
paginated in that order:

```bash
curl "http://localhost:8000/api/v1/products?condition=sleep-issues&sort_by=price_low&page=1"
```

### Analytics

The browser tracker starts a visitor session, reports page views,
interactions and scrolling, and ends the session when the tab closes.
Events are forwarded to GA4 inline or through the background worker.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Auth",
            "description": "Verify staff access tokens",
        },
        {
            "name": "Products",
            "description": "Product listing, detail and shop-by facets",
        },
        {
            "name": "Blog",
            "description": "Published articles",
        },
        {
            "name": "Testimonials",
            "description": "Customer reviews",
        },
        {
            "name": "Contact",
            "description": "Contact form, WhatsApp link and staff submissions view",
        },
        {
            "name": "Newsletter",
            "description": "Newsletter signup",
        },
        {
            "name": "Analytics",
            "description": "Browser events and visitor sessions",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

def _resource_from_path(path: str) -> str:
    """'/api/v1/blog/my-post' -> 'blog'"""
    parts = [p for p in path[len(API_PREFIX):].split("/") if p]
    return parts[0] if parts else "data"


@app.exception_handler(StorefrontException)
async def handle_storefront_exception(request: Request, exc: StorefrontException):
    """Handle custom storefront exceptions."""
    return await storefront_exception_handler(request, exc)


@app.exception_handler(SupabaseClientError)
async def handle_backend_error(request: Request, exc: SupabaseClientError):
    """Database failures surface as 503 'Failed to load ...'."""
    logger.error(f"Backend error on {request.url.path}: {exc}")
    unavailable = BackendUnavailableError(_resource_from_path(request.url.path), exc.message)
    return await storefront_exception_handler(request, unavailable)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix=f"{API_PREFIX}/auth",
    tags=["Auth"]
)

# Health check endpoints
app.include_router(
    health.router,
    prefix=API_PREFIX,
    tags=["Health"]
)

# Catalog endpoints
app.include_router(
    products.router,
    prefix=f"{API_PREFIX}/products",
    tags=["Products"]
)

app.include_router(
    products.catalog_router,
    prefix=f"{API_PREFIX}/catalog",
    tags=["Products"]
)

# Editorial content
app.include_router(
    content.blog_router,
    prefix=f"{API_PREFIX}/blog",
    tags=["Blog"]
)

app.include_router(
    content.testimonials_router,
    prefix=f"{API_PREFIX}/testimonials",
    tags=["Testimonials"]
)

# Forms
app.include_router(
    forms.contact_router,
    prefix=f"{API_PREFIX}/contact",
    tags=["Contact"]
)

app.include_router(
    forms.newsletter_router,
    prefix=f"{API_PREFIX}/newsletter",
    tags=["Newsletter"]
)

# Analytics
app.include_router(
    analytics.router,
    prefix=f"{API_PREFIX}/analytics",
    tags=["Analytics"]
)

app.include_router(
    analytics.debug_router,
    prefix=f"{API_PREFIX}/debug",
    tags=["Analytics"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Wellness Storefront API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": f"{API_PREFIX}/health",
    }
