# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains framework-agnostic storefront logic:
# - models/: Pydantic schemas for products, content, forms and analytics
# - services/: Catalog filter/sort/paginate, blog, forms, session tracking
#
# Code in this package should NOT import from FastAPI routers or Celery.
# =============================================================================
