# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for the storefront:
# - product.py: Product, filters, sort options and listing pages
# - content.py: Blog posts and testimonials
# - forms.py: Contact and newsletter payloads
# - analytics.py: Tracking events, visitor sessions, dashboard summary
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Product Models - Catalog
# -----------------------------------------------------------------------------
from .product import (
    CatalogFacet,
    Product,
    ProductDetail,
    ProductFilters,
    ProductPage,
    ProductSummary,
    SortOption,
)

# -----------------------------------------------------------------------------
# Content Models - Blog and testimonials
# -----------------------------------------------------------------------------
from .content import (
    BlogPost,
    BlogPostDetail,
    BlogPostList,
    BlogPostSummary,
    Testimonial,
    TestimonialList,
)

# -----------------------------------------------------------------------------
# Form Models - Contact and newsletter
# -----------------------------------------------------------------------------
from .forms import (
    ContactResponse,
    ContactSubmission,
    InquiryType,
    NewsletterResponse,
    NewsletterSignup,
    WhatsAppLink,
)

# -----------------------------------------------------------------------------
# Analytics Models - Event forwarding and session tracking
# -----------------------------------------------------------------------------
from .analytics import (
    AnalyticsEvent,
    EventBatch,
    EventDispatchResponse,
    InteractionRequest,
    PageViewRequest,
    ScrollRequest,
    SessionQuality,
    SessionStartRequest,
    SessionStatusResponse,
    SessionSummary,
    VisibilityRequest,
    VisitorSession,
)

__all__ = [
    # Product
    "CatalogFacet",
    "Product",
    "ProductDetail",
    "ProductFilters",
    "ProductPage",
    "ProductSummary",
    "SortOption",
    # Content
    "BlogPost",
    "BlogPostDetail",
    "BlogPostList",
    "BlogPostSummary",
    "Testimonial",
    "TestimonialList",
    # Forms
    "ContactResponse",
    "ContactSubmission",
    "InquiryType",
    "NewsletterResponse",
    "NewsletterSignup",
    "WhatsAppLink",
    # Analytics
    "AnalyticsEvent",
    "EventBatch",
    "EventDispatchResponse",
    "InteractionRequest",
    "PageViewRequest",
    "ScrollRequest",
    "SessionQuality",
    "SessionStartRequest",
    "SessionStatusResponse",
    "SessionSummary",
    "VisibilityRequest",
    "VisitorSession",
]
