# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .catalog_service import CatalogService
from .content_service import BlogService, TestimonialService
from .forms_service import FormsService
from .analytics_service import AnalyticsService
from .session_tracker import SessionTracker

__all__ = [
    "CatalogService",
    "BlogService",
    "TestimonialService",
    "FormsService",
    "AnalyticsService",
    "SessionTracker",
]
