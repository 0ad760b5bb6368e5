# =============================================================================
# app/routers/products.py - Product Catalog Endpoints
# =============================================================================
# Product listing (filter, sort, paginate), product detail and the static
# "shop by" facets. All endpoints are public.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.config import settings
from app.dependencies import GAClientIdDep
from core.models.product import CatalogFacet, ProductDetail, ProductFilters, ProductPage
from core.services import analytics_service as analytics
from core.services.analytics_service import AnalyticsService
from core.services.catalog_service import (
    HEALTH_CONDITIONS,
    LIFESTYLE_CATEGORIES,
    CatalogService,
)

router = APIRouter()
catalog_router = APIRouter()


# =============================================================================
# Products
# =============================================================================

@router.get("", response_model=ProductPage)
async def list_products(
    ga_client_id: GAClientIdDep,
    category: Annotated[str | None, Query(description="Category, or 'All'")] = None,
    age_group: Annotated[str | None, Query(description="Age group")] = None,
    benefit: Annotated[str | None, Query(description="Text contained in a benefit")] = None,
    condition: Annotated[
        str | None,
        Query(description="Health condition or lifestyle slug, e.g. 'sleep-issues'")
    ] = None,
    search: Annotated[str | None, Query(description="Free-text search")] = None,
    featured: Annotated[bool | None, Query(description="Only featured products")] = None,
    sort_by: Annotated[
        str,
        Query(description="name, newest, oldest, featured, price_low or price_high")
    ] = "name",
    page: Annotated[int, Query(ge=1, description="Page number")] = 1,
    page_size: Annotated[int | None, Query(ge=1, le=100, description="Items per page")] = None,
):
    """
    List active products.

    Filters narrow the list, then it is sorted and sliced into pages.
    An unknown sort_by falls back to name. A page past the end is empty.
    """
    filters = ProductFilters(
        category=category,
        age_group=age_group,
        benefit=benefit,
        condition=condition,
        search=search,
        featured=featured,
    )
    result = CatalogService.browse_products(
        filters,
        sort_by=sort_by,
        page=page,
        page_size=page_size or settings.PRODUCTS_PAGE_SIZE,
    )

    if search and search.strip():
        AnalyticsService.track(ga_client_id, analytics.search_event(search.strip()))

    return result


@router.get("/categories", response_model=list[str])
async def list_product_categories():
    """
    Distinct product categories, with "All" first.
    """
    return CatalogService.categories()


@router.get("/{product_id}", response_model=ProductDetail)
async def get_product(
    product_id: Annotated[str, Path(description="Product ID")],
    ga_client_id: GAClientIdDep,
):
    """
    Get one product with up to four related products from its category.

    Returns 404 PRODUCT_NOT_FOUND if the product does not exist.
    """
    detail = CatalogService.get_product_detail(product_id)

    product = detail.product
    AnalyticsService.track(
        ga_client_id,
        analytics.view_item_event(
            product.price or 0,
            [{"item_id": product.id, "item_name": product.name, "item_category": product.category}],
        ),
    )

    return detail


# =============================================================================
# Catalog Facets
# =============================================================================

@catalog_router.get("/conditions", response_model=list[CatalogFacet])
async def list_health_conditions():
    """Health conditions shown on the home page."""
    return HEALTH_CONDITIONS


@catalog_router.get("/lifestyle", response_model=list[CatalogFacet])
async def list_lifestyle_categories():
    """Lifestyle problems shown in the "shop by lifestyle" section."""
    return LIFESTYLE_CATEGORIES
