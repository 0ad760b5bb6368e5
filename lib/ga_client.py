# =============================================================================
# lib/ga_client.py - Google Analytics 4 Measurement Protocol Client
# =============================================================================
# Sends storefront analytics events to the GA4 collection endpoint.
#
# Delivery is fire-and-forget: a missing configuration or a failed request
# is logged and reported as False, never raised to the caller.
#
# Usage:
#   from lib.ga_client import GAClient
#   GAClient.send_event("client-123", "newsletter_signup", {"method": "website"})
# =============================================================================

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

GA_COLLECT_URL = "https://www.google-analytics.com/mp/collect"
GA_DEBUG_COLLECT_URL = "https://www.google-analytics.com/debug/mp/collect"

GA_ID_PATTERN = re.compile(r"^G-[A-Z0-9]{10}$")

# GA4 caps events per request
MAX_EVENTS_PER_REQUEST = 25


def is_valid_ga_id(measurement_id: str) -> bool:
    """Check that a measurement ID has the G-XXXXXXXXXX format."""
    return bool(GA_ID_PATTERN.match(measurement_id or ""))


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop None values; GA rejects null parameters."""
    return {k: v for k, v in (params or {}).items() if v is not None}


class GAClient:
    """
    Thin Measurement Protocol client.

    All methods are class methods so the worker and the API share one
    code path.
    """

    @classmethod
    def is_configured(cls) -> bool:
        return settings.analytics_configured

    @classmethod
    def build_payload(
        cls,
        client_id: str,
        events: list[dict[str, Any]],
        user_id: str | None = None,
    ) -> dict[str, Any]:
        """
        Build the JSON body for /mp/collect.

        Args:
            client_id: Pseudonymous browser identifier
            events: List of {"name": ..., "params": {...}} dicts
            user_id: Optional signed-in user identifier
        """
        payload: dict[str, Any] = {
            "client_id": client_id,
            "events": [
                {"name": event["name"], "params": _clean_params(event.get("params"))}
                for event in events
            ],
        }
        if user_id:
            payload["user_id"] = user_id
        return payload

    @classmethod
    def send_events(
        cls,
        client_id: str,
        events: list[dict[str, Any]],
        user_id: str | None = None,
        debug: bool = False,
    ) -> bool:
        """
        Send a batch of events.

        Returns:
            True if every request was accepted, False if skipped or failed
        """
        if not events:
            return True

        if not cls.is_configured():
            logger.debug(f"GA not configured, skipping {len(events)} event(s)")
            return False

        url = GA_DEBUG_COLLECT_URL if debug else GA_COLLECT_URL
        query = {
            "measurement_id": settings.GA_MEASUREMENT_ID,
            "api_secret": settings.GA_API_SECRET,
        }

        ok = True
        for start in range(0, len(events), MAX_EVENTS_PER_REQUEST):
            batch = events[start:start + MAX_EVENTS_PER_REQUEST]
            payload = cls.build_payload(client_id, batch, user_id=user_id)

            try:
                response = httpx.post(
                    url,
                    params=query,
                    json=payload,
                    timeout=settings.GA_TIMEOUT_SECONDS,
                )
                response.raise_for_status()
                logger.debug(f"GA accepted {len(batch)} event(s): {[e['name'] for e in batch]}")
            except httpx.HTTPError as e:
                logger.error(f"GA event delivery failed: {e}")
                ok = False

        return ok

    @classmethod
    def send_event(
        cls,
        client_id: str,
        name: str,
        params: dict[str, Any] | None = None,
        user_id: str | None = None,
    ) -> bool:
        """Send a single event. See send_events."""
        return cls.send_events(client_id, [{"name": name, "params": params or {}}], user_id=user_id)

    @classmethod
    def debug_status(cls) -> dict[str, Any]:
        """
        Report the GA configuration without exposing secrets.
        """
        ga_id = settings.GA_MEASUREMENT_ID
        return {
            "ga_id": ga_id or "NOT SET",
            "ga_id_valid": is_valid_ga_id(ga_id),
            "api_secret_set": bool(settings.GA_API_SECRET),
            "settings": sorted(
                name for name in type(settings).model_fields if "GA" in name
            ),
            "environment": settings.ENVIRONMENT,
            "message": "GA ID is set!" if ga_id else "GA ID is missing!",
        }
