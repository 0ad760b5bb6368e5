# =============================================================================
# core/services/content_service.py - Blog and Testimonial Logic
# =============================================================================
# Handles reads of editorial content and the small amount of logic around
# it: category filtering, related posts, average rating.
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient
from core.models.content import (
    BlogPost,
    BlogPostDetail,
    BlogPostList,
    BlogPostSummary,
    Testimonial,
    TestimonialList,
)
from app.exceptions import BlogPostNotFoundError

logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"

RELATED_POSTS_LIMIT = 3


def filter_posts_by_category(posts: list[BlogPost], category: str | None) -> list[BlogPost]:
    """Keep posts in one category; 'All' or empty keeps everything."""
    if not category or category.lower() == ALL_CATEGORIES.lower():
        return list(posts)
    wanted = category.lower()
    return [p for p in posts if p.category.lower() == wanted]


def blog_categories(posts: list[BlogPost]) -> list[str]:
    """Distinct post categories in first-seen order, led by 'All'. Case-insensitive."""
    seen: dict[str, str] = {}
    for post in posts:
        if post.category:
            seen.setdefault(post.category.casefold(), post.category)
    return [ALL_CATEGORIES, *seen.values()]


def select_related_posts(
    post: BlogPost,
    candidates: list[BlogPost],
    limit: int = RELATED_POSTS_LIMIT,
) -> list[BlogPost]:
    """Posts in the same category as `post`, excluding itself."""
    return [
        p for p in candidates
        if p.id != post.id and p.category == post.category
    ][:limit]


def average_rating(testimonials: list[Testimonial]) -> float | None:
    """Mean star rating rounded to one decimal; None when there are none."""
    if not testimonials:
        return None
    return round(sum(t.rating for t in testimonials) / len(testimonials), 1)


class BlogService:
    """
    Service for the blog listing and article pages.
    """

    @staticmethod
    def fetch_posts(limit: int | None = None) -> list[BlogPost]:
        rows = SupabaseClient.fetch_blog_posts(limit=limit)
        return [BlogPost.model_validate(row) for row in rows]

    @staticmethod
    def list_posts(category: str | None = ALL_CATEGORIES, limit: int | None = None) -> BlogPostList:
        """
        List published posts, optionally within one category.

        The limit applies after the category filter.
        """
        posts = BlogService.fetch_posts()
        filtered = filter_posts_by_category(posts, category)
        if limit:
            filtered = filtered[:limit]

        return BlogPostList(
            posts=[BlogPostSummary.from_post(p) for p in filtered],
            total=len(filtered),
            category=category or ALL_CATEGORIES,
            categories=blog_categories(posts),
        )

    @staticmethod
    def get_post(slug: str) -> BlogPost:
        """
        Get a published post by slug.

        Raises:
            BlogPostNotFoundError: If no published post has this slug
        """
        row = SupabaseClient.fetch_blog_post(slug)
        if not row:
            raise BlogPostNotFoundError(slug)
        return BlogPost.model_validate(row)

    @staticmethod
    def get_post_detail(slug: str) -> BlogPostDetail:
        """
        Post plus up to three related posts.

        A failure loading related posts is logged and leaves the list empty.
        """
        post = BlogService.get_post(slug)

        related: list[BlogPost] = []
        try:
            related = select_related_posts(post, BlogService.fetch_posts())
        except Exception as e:
            logger.warning(f"Could not load related posts for {slug}: {e}")

        return BlogPostDetail(
            post=post,
            related=[BlogPostSummary.from_post(p) for p in related],
        )


class TestimonialService:
    """
    Service for customer testimonials.
    """

    __test__ = False

    @staticmethod
    def list_testimonials(limit: int | None = None, product_id: str | None = None) -> TestimonialList:
        rows = SupabaseClient.fetch_testimonials(limit=limit, product_id=product_id)
        testimonials = [Testimonial.model_validate(row) for row in rows]
        return TestimonialList(
            testimonials=testimonials,
            total=len(testimonials),
            average_rating=average_rating(testimonials),
        )
