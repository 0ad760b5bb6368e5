# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for the storefront tables
# - ga_client.py: GA4 Measurement Protocol client
# - utils.py: Shared helpers (image URLs, WhatsApp links, timestamps)
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.ga_client import GAClient, is_valid_ga_id
from lib.utils import first_image, get_valid_image_url, whatsapp_link

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Analytics
    "GAClient",
    "is_valid_ga_id",
    # Utils
    "first_image",
    "get_valid_image_url",
    "whatsapp_link",
]
