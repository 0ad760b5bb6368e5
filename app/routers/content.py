# =============================================================================
# app/routers/content.py - Blog and Testimonial Endpoints
# =============================================================================
# Read-only editorial content. All endpoints are public.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query

from core.models.content import BlogPostDetail, BlogPostList, TestimonialList
from core.services.content_service import BlogService, TestimonialService

blog_router = APIRouter()
testimonials_router = APIRouter()


@blog_router.get("", response_model=BlogPostList)
async def list_blog_posts(
    category: Annotated[str, Query(description="Category, or 'All'")] = "All",
    limit: Annotated[int | None, Query(ge=1, le=100, description="Maximum posts")] = None,
):
    """
    List published posts, newest first.
    """
    return BlogService.list_posts(category=category, limit=limit)


@blog_router.get("/{slug}", response_model=BlogPostDetail)
async def get_blog_post(
    slug: Annotated[str, Path(description="Post slug")],
):
    """
    Get a published post with up to three related posts.

    Returns 404 BLOG_POST_NOT_FOUND for unknown or unpublished slugs.
    """
    return BlogService.get_post_detail(slug)


@testimonials_router.get("", response_model=TestimonialList)
async def list_testimonials(
    limit: Annotated[int | None, Query(ge=1, le=100)] = None,
    product_id: Annotated[str | None, Query(description="Only this product's testimonials")] = None,
):
    """
    List testimonials, newest first, with their average rating.
    """
    return TestimonialService.list_testimonials(limit=limit, product_id=product_id)
