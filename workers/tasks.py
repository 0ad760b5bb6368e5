# =============================================================================
# workers/tasks.py - Celery Task Definitions
# =============================================================================
# Background delivery of analytics events to GA4.
#
# Tasks:
# - send_analytics_events: Forward a batch of events for one client id
# =============================================================================

import logging
from typing import Any

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name="workers.tasks.send_analytics_events")
def send_analytics_events(
    client_id: str,
    events: list[dict[str, Any]],
    user_id: str | None = None,
) -> dict[str, Any]:
    """
    Forward a batch of events to the GA4 collection endpoint.

    Delivery is attempted once; failures are logged by the GA client.

    Args:
        client_id: GA client id of the browser
        events: List of {"name": ..., "params": {...}} dicts
        user_id: Optional signed-in user id

    Returns:
        Dict with:
        - delivered: bool
        - count: number of events in the batch
    """
    from lib.ga_client import GAClient

    delivered = GAClient.send_events(client_id, events, user_id=user_id)

    if not delivered:
        logger.warning(f"Analytics batch of {len(events)} event(s) for {client_id} not delivered")

    return {"delivered": delivered, "count": len(events)}
