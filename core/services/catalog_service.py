# =============================================================================
# core/services/catalog_service.py - Product Catalog Logic
# =============================================================================
# Fetches active products from Supabase and applies the listing page's
# client-side passes in order: filter -> sort -> paginate.
#
# Each pass is a plain function over a list of Product models so it can be
# tested without a database.
# =============================================================================

import logging
import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from lib.supabase_client import SupabaseClient
from core.models.product import (
    CatalogFacet,
    Product,
    ProductDetail,
    ProductFilters,
    ProductPage,
    ProductSummary,
    SortOption,
)
from app.exceptions import ProductNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALL_CATEGORIES = "All"

RELATED_PRODUCTS_LIMIT = 4


# =============================================================================
# Static Facets
# =============================================================================

HEALTH_CONDITIONS: list[CatalogFacet] = [
    CatalogFacet(slug="immunity", name="Immunity", tagline="Defense & resilience"),
    CatalogFacet(slug="cognitive", name="Cognitive", tagline="Focus & clarity"),
    CatalogFacet(slug="sleep", name="Sleep", tagline="Rest & recovery"),
    CatalogFacet(slug="heart", name="Heart", tagline="Cardio wellness"),
    CatalogFacet(slug="stress", name="Stress", tagline="Calm & balance"),
    CatalogFacet(slug="inflammation", name="Inflammation", tagline="Natural relief"),
    CatalogFacet(slug="digestion", name="Digestion", tagline="Gut harmony"),
    CatalogFacet(slug="energy", name="Energy", tagline="Vitality support"),
]

LIFESTYLE_CATEGORIES: list[CatalogFacet] = [
    CatalogFacet(slug="joint-pain", name="Joint Pain", tagline="Natural relief & joint support"),
    CatalogFacet(slug="inflammation", name="Inflammation", tagline="Natural anti-inflammatory support"),
    CatalogFacet(slug="low-immunity", name="Low Immunity", tagline="Boost defense & immune system"),
    CatalogFacet(slug="stress", name="Stress", tagline="Mental calm & stress management"),
    CatalogFacet(slug="fatigue", name="Fatigue", tagline="Energy boost & vitality support"),
    CatalogFacet(slug="sleep-issues", name="Sleep Issues", tagline="Better rest & sleep quality"),
]


# =============================================================================
# Filtering
# =============================================================================

def _norm(value: str | None) -> str:
    """Lowercase, trim and treat slug hyphens/underscores as spaces."""
    if not value:
        return ""
    return " ".join(value.replace("-", " ").replace("_", " ").lower().split())


def _is_all(category: str | None) -> bool:
    return not category or category.strip().lower() == ALL_CATEGORIES.lower()


def filter_products(products: list[Product], filters: ProductFilters) -> list[Product]:
    """
    Apply the listing filters as sequential linear passes.

    Order: category, age group, benefit, condition, search text, featured.
    Unset criteria are skipped.

    Args:
        products: Products as fetched from the backend
        filters: Criteria selected on the listing page

    Returns:
        New list with the matching products in their original order
    """
    result = list(products)

    if not _is_all(filters.category):
        wanted = filters.category.strip().lower()
        result = [p for p in result if (p.category or "").lower() == wanted]

    if filters.age_group:
        wanted = filters.age_group.strip().lower()
        result = [p for p in result if (p.age_group or "").lower() == wanted]

    if filters.benefit:
        wanted = filters.benefit.strip().lower()
        result = [p for p in result if any(wanted in b.lower() for b in p.benefits)]

    if filters.condition:
        wanted = _norm(filters.condition)
        result = [
            p for p in result
            if any(wanted in _norm(problem) for problem in p.lifestyle_problems)
        ]

    if filters.search and filters.search.strip():
        term = filters.search.strip().lower()
        result = [p for p in result if _matches_search(p, term)]

    if filters.featured is not None:
        result = [p for p in result if p.is_featured == filters.featured]

    return result


def _matches_search(product: Product, term: str) -> bool:
    haystacks = [product.name, product.description, product.category, *product.benefits]
    return any(term in h.lower() for h in haystacks if h)


# =============================================================================
# Sorting
# =============================================================================

def _name_key(product: Product) -> str:
    return (product.name or "").casefold()


def sort_products(products: list[Product], sort_by: SortOption | str = SortOption.NAME) -> list[Product]:
    """
    Sort products for display. Never mutates the input.

    - name: case-insensitive, missing names sort as ""
    - newest / oldest: by created_at, undated products last
    - featured: featured first, then by name
    - price_low / price_high: by price, unpriced products last, ties by name

    Unknown sort keys fall back to name.
    """
    try:
        option = SortOption(sort_by)
    except ValueError:
        logger.debug(f"Unknown sort option {sort_by!r}, sorting by name")
        option = SortOption.NAME

    if option in (SortOption.NEWEST, SortOption.OLDEST):
        dated = [p for p in products if p.created_at is not None]
        undated = [p for p in products if p.created_at is None]
        dated = sorted(dated, key=lambda p: p.created_at, reverse=option == SortOption.NEWEST)
        return dated + sorted(undated, key=_name_key)

    if option == SortOption.FEATURED:
        return sorted(products, key=lambda p: (not p.is_featured, _name_key(p)))

    if option in (SortOption.PRICE_LOW, SortOption.PRICE_HIGH):
        sign = 1 if option == SortOption.PRICE_LOW else -1
        priced = [p for p in products if p.price is not None]
        unpriced = [p for p in products if p.price is None]
        priced = sorted(priced, key=lambda p: (sign * p.price, _name_key(p)))
        return priced + sorted(unpriced, key=_name_key)

    return sorted(products, key=_name_key)


# =============================================================================
# Pagination
# =============================================================================

@dataclass
class PageSlice(Generic[T]):
    """One fixed-size slice of a list."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 12
    total_pages: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1


def paginate(items: list[T], page: int = 1, page_size: int = 12) -> PageSlice[T]:
    """
    Slice a list into 1-indexed pages of page_size.

    A page past the end yields an empty slice with the real totals.

    Raises:
        ValueError: If page or page_size is below 1
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    total = len(items)
    start = (page - 1) * page_size

    return PageSlice(
        items=items[start:start + page_size],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size),
    )


def list_categories(products: list[Product]) -> list[str]:
    """
    Distinct product categories in first-seen order, led by 'All'.

    Categories differing only by case or surrounding spaces are listed
    once, under the first spelling seen.
    """
    seen: dict[str, str] = {}
    for product in products:
        if product.category:
            seen.setdefault(product.category.strip().casefold(), product.category)
    return [ALL_CATEGORIES, *seen.values()]


# =============================================================================
# Service
# =============================================================================

class CatalogService:
    """
    Service for the product listing and detail pages.
    """

    @staticmethod
    def fetch_products(filters: ProductFilters | None = None) -> list[Product]:
        """Fetch active products from the backend as models."""
        query_filters = filters.to_query_filters() if filters else {}
        rows = SupabaseClient.fetch_products(query_filters)
        return [Product.model_validate(row) for row in rows]

    @staticmethod
    def browse_products(
        filters: ProductFilters,
        sort_by: SortOption | str = SortOption.NAME,
        page: int = 1,
        page_size: int = 12,
    ) -> ProductPage:
        """
        Fetch, filter, sort and paginate the catalog.

        Returns:
            ProductPage; an empty page when nothing matches
        """
        products = CatalogService.fetch_products(filters)
        categories = list_categories(products)

        matching = filter_products(products, filters)
        ordered = sort_products(matching, sort_by)
        page_slice = paginate(ordered, page=page, page_size=page_size)

        logger.info(
            f"Catalog browse: {len(products)} fetched, {len(matching)} matched, "
            f"page {page}/{page_slice.total_pages}"
        )

        try:
            sort_option = SortOption(sort_by)
        except ValueError:
            sort_option = SortOption.NAME

        return ProductPage(
            items=[ProductSummary.from_product(p) for p in page_slice.items],
            total=page_slice.total,
            page=page_slice.page,
            page_size=page_slice.page_size,
            total_pages=page_slice.total_pages,
            has_next=page_slice.has_next,
            has_previous=page_slice.has_previous,
            sort_by=sort_option,
            categories=categories,
        )

    @staticmethod
    def get_product(product_id: str) -> Product:
        """
        Get a product by ID.

        Raises:
            ProductNotFoundError: If no product has this ID
        """
        row = SupabaseClient.fetch_product(product_id)
        if not row:
            raise ProductNotFoundError(product_id)
        return Product.model_validate(row)

    @staticmethod
    def related_products(product: Product, limit: int = RELATED_PRODUCTS_LIMIT) -> list[Product]:
        """Other active products in the same category, newest first."""
        if not product.category:
            return []

        rows = SupabaseClient.fetch_products({"category": product.category})
        related = [
            Product.model_validate(row) for row in rows
            if str(row.get("id")) != product.id
        ]
        return related[:limit]

    @staticmethod
    def get_product_detail(product_id: str) -> ProductDetail:
        """Product plus related products for the detail page."""
        product = CatalogService.get_product(product_id)
        related = CatalogService.related_products(product)
        return ProductDetail(
            product=product,
            related=[ProductSummary.from_product(p) for p in related],
        )

    @staticmethod
    def categories() -> list[str]:
        return list_categories(CatalogService.fetch_products())
