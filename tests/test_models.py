# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the Pydantic models to ensure:
# - Database rows with missing or null columns parse cleanly
# - Invalid data raises ValidationError
# - Default values work as expected
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    AnalyticsEvent,
    EventBatch,
    NewsletterSignup,
    Product,
    ProductFilters,
    ProductSummary,
    SessionStartRequest,
    SortOption,
    VisitorSession,
)
from core.models import content as content_models


# =============================================================================
# Product Model Tests
# =============================================================================

class TestProduct:
    """Tests for Product model."""

    def test_minimal_row(self):
        """Only id is required; list columns default to empty."""
        product = Product.model_validate({"id": 7})

        assert product.id == "7"
        assert product.images == []
        assert product.benefits == []
        assert product.is_featured is False
        assert product.primary_image is None

    def test_null_columns(self, product_rows):
        product = Product.model_validate(product_rows[1])

        assert product.images == []
        assert product.key_ingredients == []

    def test_images_cleaned(self, product_rows):
        product = Product.model_validate(product_rows[0])

        assert product.images == ["https://cdn.example.com/ashwagandha.jpg"]
        assert product.primary_image == "https://cdn.example.com/ashwagandha.jpg"

    def test_relative_image_kept(self, product_rows):
        product = Product.model_validate(product_rows[2])
        assert product.primary_image == "/images/immunity.png"

    def test_summary_from_product(self, products):
        summary = ProductSummary.from_product(products[0])

        assert summary.id == "1"
        assert len(summary.benefits) == 2
        assert summary.is_featured is True


class TestProductFilters:

    def test_defaults(self):
        filters = ProductFilters()
        assert filters.category is None
        assert filters.to_query_filters() == {}

    def test_featured_pushed_down(self):
        assert ProductFilters(featured=False).to_query_filters() == {"is_featured": False}

    def test_sort_option_values(self):
        assert SortOption("price_high") == SortOption.PRICE_HIGH
        with pytest.raises(ValueError):
            SortOption("popularity")


# =============================================================================
# Content Model Tests
# =============================================================================

class TestBlogPost:

    def test_nulls_become_defaults(self):
        post = content_models.BlogPost.model_validate(
            {"id": 3, "title": "T", "slug": "t", "excerpt": None, "author": None, "tags": None}
        )
        assert post.id == "3"
        assert post.excerpt == ""
        assert post.tags == []

    def test_summary_has_no_body(self, blog_rows):
        post = content_models.BlogPost.model_validate(blog_rows[0])
        summary = content_models.BlogPostSummary.from_post(post)

        assert summary.slug == post.slug
        assert not hasattr(summary, "content")


# =============================================================================
# Form Model Tests
# =============================================================================

class TestNewsletterSignup:

    def test_default_method(self):
        assert NewsletterSignup(email="a@b.co").method == "website"

    def test_client_id_not_serialized(self):
        signup = NewsletterSignup(email="a@b.co", client_id="1.2")
        assert "client_id" not in signup.model_dump()

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            NewsletterSignup(email="a@b")


# =============================================================================
# Analytics Model Tests
# =============================================================================

class TestAnalyticsModels:

    def test_event_name_pattern(self):
        assert AnalyticsEvent(name="view_item").params == {}
        with pytest.raises(ValidationError):
            AnalyticsEvent(name="1starts_with_digit")

    def test_batch_requires_events(self):
        with pytest.raises(ValidationError):
            EventBatch(client_id="1.2", events=[])

    def test_batch_size_limit(self):
        with pytest.raises(ValidationError):
            EventBatch(client_id="1.2", events=[{"name": "e"}] * 101)

    def test_session_start_requires_client_id(self):
        with pytest.raises(ValidationError):
            SessionStartRequest(client_id="")

    def test_visitor_session_defaults(self, visitor_session_row):
        session = VisitorSession.model_validate(
            {k: visitor_session_row[k] for k in ("session_id", "client_id", "started_at")}
        )

        assert session.page_count == 1
        assert session.interactions == 0
        assert session.milestones == []
        assert session.scroll_milestones == {}
        assert session.quality is None
