# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# These models define the API contract for the product catalog:
# - Product: One row of the products table (every column nullable except id)
# - ProductFilters: Client-side filter criteria for the listing page
# - SortOption: Supported sort orders
# - ProductPage: One page of a filtered, sorted listing
# - CatalogFacet: Static "shop by" entries (health conditions, lifestyle)
# =============================================================================

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from lib.utils import first_image, get_valid_image_url


class SortOption(str, Enum):
    """
    Sort orders offered on the product listing.

    Unknown values fall back to NAME.
    """
    NAME = "name"
    NEWEST = "newest"
    OLDEST = "oldest"
    FEATURED = "featured"
    PRICE_LOW = "price_low"
    PRICE_HIGH = "price_high"


class Product(BaseModel):
    """
    A catalog product as stored in the hosted database.

    The database owns the shape; list columns default to empty lists so
    callers can iterate without None checks.
    """

    id: str
    name: str | None = None
    description: str | None = None
    detailed_info: str | None = None
    quantity: int | None = None
    product_ml: float | None = None
    product_weight: float | None = None
    price: float | None = None
    images: list[str] = Field(default_factory=list)
    lifestyle_problems: list[str] = Field(default_factory=list)
    is_featured: bool = False
    created_at: datetime | None = None
    category: str | None = None
    age_group: str | None = None
    key_ingredients: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    usage_instructions: list[str] = Field(default_factory=list)
    status: str | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value):
        return str(value)

    @field_validator(
        "images",
        "lifestyle_problems",
        "key_ingredients",
        "benefits",
        "usage_instructions",
        mode="before",
    )
    @classmethod
    def _none_to_list(cls, value):
        return value or []

    @field_validator("is_featured", mode="before")
    @classmethod
    def _none_to_false(cls, value):
        return bool(value)

    @field_validator("images")
    @classmethod
    def _clean_images(cls, value: list[str]) -> list[str]:
        return [url for url in (get_valid_image_url(v) for v in value) if url]

    @property
    def primary_image(self) -> str | None:
        """First usable image, used on listing cards."""
        return first_image(self.images)


class ProductSummary(BaseModel):
    """Card-sized view of a product for listings."""

    id: str
    name: str | None = None
    description: str | None = None
    category: str | None = None
    price: float | None = None
    image: str | None = None
    benefits: list[str] = Field(default_factory=list)
    is_featured: bool = False

    @classmethod
    def from_product(cls, product: Product) -> "ProductSummary":
        return cls(
            id=product.id,
            name=product.name,
            description=product.description,
            category=product.category,
            price=product.price,
            image=product.primary_image,
            # Cards show at most two benefits
            benefits=product.benefits[:2],
            is_featured=product.is_featured,
        )


class ProductFilters(BaseModel):
    """
    Filter criteria for the product listing.

    Every field is optional; an unset field (or category "All") does not
    narrow the result.

    Example:
        {"category": "ayurvedic", "condition": "sleep", "search": "ashwa"}
    """

    category: str | None = Field(default=None, description="Category, or 'All'")
    age_group: str | None = Field(default=None, description="Exact age group")
    benefit: str | None = Field(default=None, description="Substring of any benefit")
    condition: str | None = Field(
        default=None,
        description="Health condition / lifestyle problem slug (e.g. 'sleep-issues')"
    )
    search: str | None = Field(default=None, description="Free-text search")
    featured: bool | None = Field(default=None, description="Only featured (or non-featured)")

    def to_query_filters(self) -> dict:
        """
        Filters the hosted backend can apply before the client-side passes.

        Only exact-match filters are pushed down; the fuzzy ones stay local.
        """
        filters: dict = {}
        if self.featured is not None:
            filters["is_featured"] = self.featured
        return filters


class ProductPage(BaseModel):
    """
    One page of the product listing.

    Example:
        {"items": [...], "total": 30, "page": 2, "page_size": 12,
         "total_pages": 3, "has_next": true, "has_previous": true}
    """

    items: list[ProductSummary] = Field(default_factory=list)
    total: int = Field(default=0, ge=0, description="Products matching the filters")
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=12, ge=1)
    total_pages: int = Field(default=0, ge=0)
    has_next: bool = False
    has_previous: bool = False
    sort_by: SortOption = SortOption.NAME
    categories: list[str] = Field(default_factory=list)


class ProductDetail(BaseModel):
    """Full product plus related products for the detail page."""

    product: Product
    related: list[ProductSummary] = Field(default_factory=list)


class CatalogFacet(BaseModel):
    """A 'shop by' entry linking to a pre-filtered listing."""

    slug: str
    name: str
    tagline: str
