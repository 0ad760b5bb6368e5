# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides sample database rows for products, posts, testimonials and
#   visitor sessions
# =============================================================================

import os
from datetime import datetime, timezone

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("GA_MEASUREMENT_ID", "")
os.environ.setdefault("GA_API_SECRET", "")
os.environ.setdefault("ANALYTICS_ASYNC", "false")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest

from core.models.product import Product


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def product_rows():
    """Four product rows as PostgREST returns them."""
    return [
        {
            "id": 1,
            "name": "Ashwagandha Calm",
            "description": "Adaptogenic root for everyday calm",
            "price": 499,
            "images": ["  https://cdn.example.com/ashwagandha.jpg ", ""],
            "lifestyle_problems": ["Stress", "Sleep Issues"],
            "is_featured": True,
            "created_at": "2024-03-01T10:00:00+00:00",
            "category": "Ayurvedic",
            "age_group": "Adults",
            "key_ingredients": ["Ashwagandha root"],
            "benefits": ["Reduces stress", "Improves sleep quality", "Supports energy"],
            "usage_instructions": ["Take one capsule at night"],
            "status": "Active",
        },
        {
            "id": 2,
            "name": "Turmeric Joint Relief",
            "description": "Curcumin blend for joints",
            "price": 349,
            "images": None,
            "lifestyle_problems": ["Joint Pain", "Inflammation"],
            "is_featured": False,
            "created_at": "2024-01-15T10:00:00+00:00",
            "category": "Ayurvedic",
            "age_group": "Seniors",
            "benefits": ["Supports joint mobility", "Natural anti-inflammatory"],
            "status": "Active",
        },
        {
            "id": 3,
            "name": "Immunity Booster Drops",
            "description": "Tulsi and giloy drops",
            "price": None,
            "images": ["/images/immunity.png"],
            "lifestyle_problems": ["Low Immunity"],
            "is_featured": True,
            "created_at": None,
            "category": "Herbal",
            "age_group": "All Ages",
            "benefits": ["Boosts immunity"],
            "status": "Active",
        },
        {
            "id": 4,
            "name": "brahmi focus",
            "description": "Cognitive blend with brahmi",
            "price": 599,
            "images": [],
            "lifestyle_problems": ["Fatigue"],
            "is_featured": None,
            "created_at": "2024-02-10T10:00:00+00:00",
            "category": "Herbal",
            "age_group": "Adults",
            "benefits": ["Sharper focus", "Memory support"],
            "status": "Active",
        },
    ]


@pytest.fixture
def products(product_rows):
    """The sample rows as Product models."""
    return [Product.model_validate(row) for row in product_rows]


@pytest.fixture
def blog_rows():
    """Published blog posts, newest first."""
    return [
        {
            "id": "b1",
            "title": "Winter Immunity Rituals",
            "slug": "winter-immunity-rituals",
            "excerpt": "Simple habits for the cold months",
            "content": "Long form content",
            "image_url": " https://cdn.example.com/winter.jpg ",
            "author": "Dr. Mehta",
            "published_at": "2024-03-10T08:00:00+00:00",
            "category": "Immunity",
            "tags": ["winter", "immunity"],
        },
        {
            "id": "b2",
            "title": "Sleep Better with Ayurveda",
            "slug": "sleep-better-with-ayurveda",
            "excerpt": "Evening routines that work",
            "content": "Long form content",
            "image_url": None,
            "author": "Dr. Rao",
            "published_at": "2024-02-01T08:00:00+00:00",
            "category": "Sleep",
            "tags": None,
        },
        {
            "id": "b3",
            "title": "Tulsi: Queen of Herbs",
            "slug": "tulsi-queen-of-herbs",
            "excerpt": "Why tulsi matters",
            "content": "Long form content",
            "image_url": "",
            "author": "Dr. Mehta",
            "published_at": "2024-01-05T08:00:00+00:00",
            "category": "Immunity",
            "tags": ["herbs"],
        },
    ]


@pytest.fixture
def testimonial_rows():
    return [
        {"id": "t1", "name": "Priya", "rating": 5, "comment": "Sleeping so much better", "product_id": "1"},
        {"id": "t2", "name": "Arjun", "rating": 4, "comment": "Knees feel great", "product_id": "2"},
        {"id": "t3", "name": "Meera", "rating": 4, "comment": "Lovely drops", "product_id": None},
    ]


@pytest.fixture
def session_start_time():
    return datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def visitor_session_row(session_start_time):
    """An open visitor session as stored in visitor_sessions."""
    return {
        "session_id": "session_1709294400000_abc123",
        "client_id": "1234567890.1700000000",
        "started_at": session_start_time.isoformat(),
        "page_count": 1,
        "interactions": 0,
        "landing_page": "/",
        "last_page": "/",
        "ended_at": None,
        "duration_seconds": None,
        "quality": None,
        "milestones": [],
        "scroll_milestones": {},
    }
