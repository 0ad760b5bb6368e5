# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - products.py: Product listing, detail and catalog facets
# - content.py: Blog posts and testimonials
# - forms.py: Contact form, WhatsApp link and newsletter signup
# - analytics.py: Browser events, visitor sessions and GA debug info
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import products
from . import content
from . import forms
from . import analytics

__all__ = [
    "health",
    "products",
    "content",
    "forms",
    "analytics",
]
