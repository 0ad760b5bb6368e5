# =============================================================================
# core/models/content.py - Blog and Testimonial Schemas
# =============================================================================
# Editorial content served by the storefront:
# - BlogPost / BlogPostSummary / BlogPostDetail
# - Testimonial / TestimonialList
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from lib.utils import get_valid_image_url


class BlogPost(BaseModel):
    """A published blog post."""

    id: str
    title: str
    slug: str
    excerpt: str = ""
    content: str = ""
    image_url: str | None = None
    author: str = ""
    published_at: datetime | None = None
    category: str = ""
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id_to_str(cls, value):
        return str(value)

    @field_validator("excerpt", "content", "author", "category", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or ""

    @field_validator("tags", mode="before")
    @classmethod
    def _none_to_list(cls, value):
        return value or []

    @field_validator("image_url", mode="before")
    @classmethod
    def _clean_image(cls, value):
        return get_valid_image_url(value)


class BlogPostSummary(BaseModel):
    """Card view of a post (no body)."""

    id: str
    title: str
    slug: str
    excerpt: str = ""
    image_url: str | None = None
    author: str = ""
    published_at: datetime | None = None
    category: str = ""

    @classmethod
    def from_post(cls, post: BlogPost) -> "BlogPostSummary":
        return cls(**post.model_dump(include=set(cls.model_fields)))


class BlogPostList(BaseModel):
    posts: list[BlogPostSummary] = Field(default_factory=list)
    total: int = 0
    category: str = "All"
    categories: list[str] = Field(default_factory=list)


class BlogPostDetail(BaseModel):
    post: BlogPost
    related: list[BlogPostSummary] = Field(default_factory=list)


class Testimonial(BaseModel):
    """A customer testimonial with a star rating."""

    id: str
    name: str
    rating: int = Field(..., description="Star rating, normally 1-5; stored values are not clamped")
    comment: str
    product_id: str | None = None
    created_at: datetime | None = None

    @field_validator("id", "product_id", mode="before")
    @classmethod
    def _to_str(cls, value):
        return str(value) if value is not None else None


class TestimonialList(BaseModel):
    testimonials: list[Testimonial] = Field(default_factory=list)
    total: int = 0
    average_rating: float | None = None
