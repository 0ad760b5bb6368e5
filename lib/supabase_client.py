# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for the storefront's Supabase tables.
# It keeps one shared client per key and provides specialized methods for:
# - Products (catalog listing and detail)
# - Blog posts and testimonials
# - Contact submissions and newsletter subscribers
# - Visitor sessions (analytics session tracking)
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   products = SupabaseClient.fetch_products({"category": "ayurvedic"})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and an actionable suggestion alongside the message.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


def is_unique_violation(error: Exception) -> bool:
    """Check whether an error (or the error it wraps) is a duplicate-key failure."""
    return UNIQUE_VIOLATION_CODE in str(error) or UNIQUE_VIOLATION_CODE in str(
        getattr(error, "details", {})
    )


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    One public (anon key) client and one service client are shared across
    the application. All methods are class methods.

    Example:
        products = SupabaseClient.fetch_products({"search": "ashwagandha"})
        post = SupabaseClient.fetch_blog_post("winter-immunity")
    """

    _instance: Client | None = None
    _service_instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the public Supabase client.

        Uses the anon key, so Row Level Security applies exactly as it does
        for the browser.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_ANON_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
                )
        return cls._instance

    @classmethod
    def get_service_client(cls) -> Client:
        """
        Get or create the service_role client.

        Used for staff reads and visitor session bookkeeping, which RLS
        does not expose to anonymous visitors.

        Raises:
            SupabaseClientError: If the service key is missing or creation fails
        """
        if cls._service_instance is None:
            if not settings.SUPABASE_SERVICE_KEY:
                raise SupabaseClientError(
                    message="Supabase service key is not configured",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Set SUPABASE_SERVICE_KEY in your .env file"
                )
            try:
                cls._service_instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase service client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase service client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._service_instance

    # -------------------------------------------------------------------------
    # Products
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_products(cls, filters: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        """
        Fetch active products, newest first.

        Args:
            filters: Optional server-side filters:
                - category: exact category
                - age_group: exact age group
                - lifestyle_problem: value contained in lifestyle_problems
                - search: substring of name or description (case-insensitive)
                - is_featured: featured flag

        Returns:
            List of product rows

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        filters = filters or {}

        try:
            query = client.table(settings.PRODUCTS_TABLE).select("*")

            if filters.get("category"):
                query = query.eq("category", filters["category"])

            if filters.get("age_group"):
                query = query.eq("age_group", filters["age_group"])

            if filters.get("lifestyle_problem"):
                query = query.contains("lifestyle_problems", [filters["lifestyle_problem"]])

            if filters.get("search"):
                term = filters["search"]
                query = query.or_(f"name.ilike.%{term}%,description.ilike.%{term}%")

            if filters.get("is_featured") is not None:
                query = query.eq("is_featured", filters["is_featured"])

            # Only show active products
            query = query.eq("status", "Active")

            response = query.order("created_at", desc=True).execute()
            products = response.data or []

            logger.debug(f"Fetched {len(products)} products with filters {filters}")
            return products

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch products: {e}",
                code="FETCH_PRODUCTS_FAILED",
                suggestion=f"Check that the {settings.PRODUCTS_TABLE} table is readable with the anon key",
                details={"filters": filters}
            )

    @classmethod
    def fetch_product(cls, product_id: str) -> dict[str, Any] | None:
        """
        Fetch a specific product by ID.

        Returns:
            Product row, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(settings.PRODUCTS_TABLE)
                .select("*")
                .eq("id", product_id)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch product: {e}",
                code="FETCH_PRODUCT_FAILED",
                suggestion="Check that the product_id exists",
                details={"product_id": product_id}
            )

    # -------------------------------------------------------------------------
    # Blog
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_blog_posts(cls, limit: int | None = None) -> list[dict[str, Any]]:
        """
        Fetch published blog posts, most recently published first.

        Args:
            limit: Maximum number of posts (all when None)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = (
                client.table("blog_posts")
                .select("*")
                .eq("published", True)
                .order("published_at", desc=True)
            )

            if limit:
                query = query.limit(limit)

            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch blog posts: {e}",
                code="FETCH_BLOG_POSTS_FAILED",
                suggestion="Check that the blog_posts table is readable with the anon key",
                details={"limit": limit}
            )

    @classmethod
    def fetch_blog_post(cls, slug: str) -> dict[str, Any] | None:
        """
        Fetch one published post by slug.

        Returns:
            Post row, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table("blog_posts")
                .select("*")
                .eq("slug", slug)
                .eq("published", True)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch blog post: {e}",
                code="FETCH_BLOG_POST_FAILED",
                details={"slug": slug}
            )

    # -------------------------------------------------------------------------
    # Testimonials
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_testimonials(
        cls,
        limit: int | None = None,
        product_id: str | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch testimonials, newest first.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = client.table("testimonials").select("*")

            if product_id:
                query = query.eq("product_id", product_id)

            query = query.order("created_at", desc=True)

            if limit:
                query = query.limit(limit)

            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch testimonials: {e}",
                code="FETCH_TESTIMONIALS_FAILED",
                details={"limit": limit, "product_id": product_id}
            )

    # -------------------------------------------------------------------------
    # Forms
    # -------------------------------------------------------------------------

    @classmethod
    def insert_contact_submission(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a contact form submission.

        Returns:
            Inserted row (or the submitted data when RLS hides the insert result)

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = client.table("contact_submissions").insert([data]).execute()
            return response.data[0] if response.data else data

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert contact submission: {e}",
                code="INSERT_CONTACT_FAILED",
                details={"email": data.get("email")}
            )

    @classmethod
    def fetch_contact_submissions(cls, limit: int = 50) -> list[dict[str, Any]]:
        """
        Fetch recent contact submissions (service key required).

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_service_client()

        try:
            response = (
                client.table("contact_submissions")
                .select("*")
                .order("created_at", desc=True)
                .limit(limit)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch contact submissions: {e}",
                code="FETCH_CONTACTS_FAILED",
                details={"limit": limit}
            )

    @classmethod
    def insert_newsletter_subscriber(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a newsletter subscriber.

        Raises:
            SupabaseClientError: If insert fails. A duplicate email keeps
                code "DUPLICATE_SUBSCRIBER" so callers can treat it as success.
        """
        client = cls.get_client()

        try:
            response = client.table("newsletter_subscribers").insert([data]).execute()
            return response.data[0] if response.data else data

        except Exception as e:
            if is_unique_violation(e):
                raise SupabaseClientError(
                    message="Email is already subscribed",
                    code="DUPLICATE_SUBSCRIBER",
                    details={"email": data.get("email")}
                )
            raise SupabaseClientError(
                message=f"Failed to insert newsletter subscriber: {e}",
                code="INSERT_SUBSCRIBER_FAILED",
                details={"email": data.get("email")}
            )

    # -------------------------------------------------------------------------
    # Visitor Sessions
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_visitor_session(cls, session_id: str) -> dict[str, Any] | None:
        """
        Fetch a visitor session by its session_id.

        Returns:
            Session row, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_service_client()

        try:
            response = (
                client.table("visitor_sessions")
                .select("*")
                .eq("session_id", session_id)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch visitor session: {e}",
                code="FETCH_VISITOR_SESSION_FAILED",
                details={"session_id": session_id}
            )

    @classmethod
    def upsert_visitor_session(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert or update a visitor session keyed by session_id.

        Raises:
            SupabaseClientError: If the write fails
        """
        client = cls.get_service_client()

        try:
            response = (
                client.table("visitor_sessions")
                .upsert(data, on_conflict="session_id")
                .execute()
            )
            return response.data[0] if response.data else data

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to save visitor session: {e}",
                code="UPSERT_VISITOR_SESSION_FAILED",
                details={"session_id": data.get("session_id")}
            )

    @classmethod
    def update_visitor_session(
        cls,
        data: dict[str, Any],
        expected_version: int,
    ) -> dict[str, Any] | None:
        """
        Update a visitor session only if its stored version still matches.

        Args:
            data: Full session row, carrying the new version
            expected_version: Version the caller loaded

        Returns:
            Updated row, or None if another write got there first

        Raises:
            SupabaseClientError: If the write fails
        """
        client = cls.get_service_client()
        session_id = data.get("session_id")

        try:
            response = (
                client.table("visitor_sessions")
                .update(data)
                .eq("session_id", session_id)
                .eq("version", expected_version)
                .execute()
            )
            return response.data[0] if response.data else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update visitor session: {e}",
                code="UPDATE_VISITOR_SESSION_FAILED",
                details={"session_id": session_id, "version": expected_version}
            )

    @classmethod
    def fetch_visitor_sessions(cls, limit: int = 500) -> list[dict[str, Any]]:
        """
        Fetch the most recent visitor sessions for dashboard aggregation.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_service_client()

        try:
            response = (
                client.table("visitor_sessions")
                .select("*")
                .order("started_at", desc=True)
                .limit(limit)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch visitor sessions: {e}",
                code="FETCH_VISITOR_SESSIONS_FAILED",
                details={"limit": limit}
            )
