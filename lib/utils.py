# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common helpers used across the storefront.
# =============================================================================

from datetime import datetime, timezone
from urllib.parse import quote


# =============================================================================
# Image URL Utilities
# =============================================================================

def get_valid_image_url(image_url: str | None) -> str | None:
    """
    Normalize a stored product/blog image reference.

    Product rows hold a mix of absolute URLs, root-relative paths and bare
    storage paths. Whitespace is trimmed and empty values become None;
    everything else is returned as-is for the front end's image loader.

    Example:
        get_valid_image_url("  https://cdn.example.com/a.jpg ")  # "https://cdn.example.com/a.jpg"
        get_valid_image_url("")  # None
    """
    if not image_url:
        return None

    clean_url = image_url.strip()
    return clean_url or None


def first_image(images: list[str] | None) -> str | None:
    """Return the first usable image URL from a list, or None."""
    for image in images or []:
        url = get_valid_image_url(image)
        if url:
            return url
    return None


# =============================================================================
# Contact Utilities
# =============================================================================

def whatsapp_link(phone_number: str, message: str) -> str:
    """
    Build a click-to-chat WhatsApp URL.

    Example:
        whatsapp_link("+919671300080", "Hi!")  # "https://wa.me/919671300080?text=Hi%21"
    """
    digits = "".join(ch for ch in phone_number if ch.isdigit())
    return f"https://wa.me/{digits}?text={quote(message, safe='')}"


# =============================================================================
# Time Utilities
# =============================================================================

def utc_now() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """
    Parse an ISO timestamp as returned by PostgREST.

    Returns None for missing or unparseable values.
    """
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
