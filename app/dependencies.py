# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Cookie, Depends

from lib.supabase_client import SupabaseClient


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client instance.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


def get_ga_client_id(
    ga_cookie: Annotated[str | None, Cookie(alias="_ga")] = None,
) -> str | None:
    """
    Client id from the browser's GA cookie.

    The cookie looks like "GA1.1.1234567890.1700000000"; the client id is
    the last two dot-separated parts.
    """
    if not ga_cookie:
        return None
    parts = ga_cookie.split(".")
    if len(parts) < 4:
        return None
    return ".".join(parts[-2:])


# Type aliases for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]
GAClientIdDep = Annotated[str | None, Depends(get_ga_client_id)]
