# =============================================================================
# workers/ - Background Analytics Delivery
# =============================================================================
# Celery on Redis. The API enqueues GA4 event batches here so that visitor
# requests never wait on the Measurement Protocol endpoint.
#
# Start a worker:
#   celery -A workers.celery_app worker --loglevel=info
#
# When ANALYTICS_ASYNC is off, or the broker can't be reached,
# AnalyticsService delivers the batch inline instead.
# =============================================================================

from .celery_app import celery_app
from .tasks import send_analytics_events

__all__ = [
    "celery_app",
    "send_analytics_events",
]
