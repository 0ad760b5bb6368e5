# =============================================================================
# core/services/analytics_service.py - Analytics Heuristics and Event Glue
# =============================================================================
# Builds the GA4 events the storefront emits and dispatches them either
# inline or through the Celery worker.
#
# Sections:
# - Heuristics: session quality score, engagement/scroll buckets, milestones
# - Event builders: one function per tracked interaction
# - AnalyticsService: dispatch to GA (inline or queued)
#
# Every builder returns a plain {"name": ..., "params": {...}} dict, the
# same shape lib.ga_client sends.
# =============================================================================

import logging
from datetime import datetime
from typing import Any

from app.config import settings
from core.models.analytics import SessionQuality
from lib.ga_client import GAClient
from lib.utils import utc_now

logger = logging.getLogger(__name__)

Event = dict[str, Any]

SCROLL_MILESTONES = (25, 50, 75, 90)

# Seconds
SESSION_MILESTONES = (30, 60, 120, 300, 600)

TRACKED_ELEMENTS = {"button", "a", "input", "textarea", "select"}

MIN_TRACKED_TIME_ON_PAGE = 3

DEFAULT_CURRENCY = "INR"


# =============================================================================
# Heuristics
# =============================================================================

def session_quality(duration: float, interactions: int, pages: int) -> SessionQuality:
    """
    Score a session: duration*0.1 + interactions*2 + pages*1.5.

    Score >= 20 is high, >= 10 medium, anything else low.

    Example:
        session_quality(120, 2, 3)  # 12 + 4 + 4.5 = 20.5 -> HIGH
    """
    score = (duration * 0.1) + (interactions * 2) + (pages * 1.5)

    if score >= 20:
        return SessionQuality.HIGH
    if score >= 10:
        return SessionQuality.MEDIUM
    return SessionQuality.LOW


def action_quality(actions: int, time_spent: float) -> SessionQuality:
    """Quality from action count and time: >3 actions and >60s high, >1 and >30s medium."""
    if actions > 3 and time_spent > 60:
        return SessionQuality.HIGH
    if actions > 1 and time_spent > 30:
        return SessionQuality.MEDIUM
    return SessionQuality.LOW


def engagement_level(time_spent: float) -> str:
    if time_spent > 30:
        return "high"
    if time_spent > 10:
        return "medium"
    return "low"


def scroll_milestone(scroll_percent: int) -> str:
    if scroll_percent >= 90:
        return "complete"
    if scroll_percent >= 50:
        return "halfway"
    return "started"


def new_scroll_milestones(scroll_percent: int, reached: set[int] | list[int]) -> list[int]:
    """Scroll milestones (25/50/75/90) crossed by scroll_percent and not yet reported."""
    return [m for m in SCROLL_MILESTONES if scroll_percent >= m and m not in reached]


def session_milestone_label(seconds: int) -> str:
    """
    Human label for a session milestone.

    Example:
        session_milestone_label(30)   # "30s"
        session_milestone_label(120)  # "2min"
        session_milestone_label(90)   # "1min 30s"
    """
    minutes, secs = divmod(seconds, 60)
    if minutes > 0:
        return f"{minutes}min" + (f" {secs}s" if secs > 0 else "")
    return f"{secs}s"


def due_session_milestones(duration: float, reached: set[int] | list[int]) -> list[int]:
    """Session milestones (in seconds) that duration has passed and are not yet reported."""
    return [m for m in SESSION_MILESTONES if duration >= m and m not in reached]


def is_likely_bounce(time_spent: float, interactions: int) -> bool:
    return time_spent < 10 and interactions == 0


def make_session_id(started_at: datetime, suffix: str | None = None) -> str:
    """session_<start epoch ms>, optionally disambiguated by a short suffix."""
    session_id = f"session_{int(started_at.timestamp() * 1000)}"
    return f"{session_id}_{suffix}" if suffix else session_id


# =============================================================================
# Event Builders
# =============================================================================

def _event(name: str, **params: Any) -> Event:
    return {"name": name, "params": params}


def _iso(moment: datetime | None = None) -> str:
    return (moment or utc_now()).isoformat()


def page_visit_event(page_name: str, additional: dict[str, Any] | None = None) -> Event:
    """`<page>_page_visit`, e.g. contact_page_visit."""
    return {
        "name": f"{page_name.lower().replace(' ', '_')}_page_visit",
        "params": {"page_name": page_name, "timestamp": _iso(), **(additional or {})},
    }


def form_submission_event(form_name: str, additional: dict[str, Any] | None = None) -> Event:
    """`<form>_form_submission`, e.g. contact_form_submission."""
    return {
        "name": f"{form_name.lower().replace(' ', '_')}_form_submission",
        "params": {"form_name": form_name, "timestamp": _iso(), **(additional or {})},
    }


def time_on_page_events(
    page_name: str,
    time_spent: int,
    interactions: int,
    session_duration: int,
) -> list[Event]:
    """
    Events for leaving a page.

    Nothing is reported for visits of 3 seconds or less. A bounce intention
    is added for short visits (< 10s) without interactions early in the
    session (< 30s).
    """
    if time_spent <= MIN_TRACKED_TIME_ON_PAGE:
        return []

    events = [
        _event(
            "time_on_page",
            page_name=page_name,
            time_spent_seconds=time_spent,
            engagement_level=engagement_level(time_spent),
        )
    ]

    if time_spent < 10 and interactions == 0 and session_duration < 30:
        events.append(bounce_intention_event(time_spent, interactions))

    return events


def bounce_intention_event(time_before_leave: int, interactions: int) -> Event:
    return _event(
        "bounce_intention",
        time_before_leave=time_before_leave,
        interaction_count=interactions,
        likely_bounce=is_likely_bounce(time_before_leave, interactions),
    )


def scroll_depth_event(scroll_percent: int, page_name: str) -> Event:
    return _event(
        "scroll_depth",
        scroll_percent=scroll_percent,
        page_name=page_name,
        milestone=scroll_milestone(scroll_percent),
    )


def user_engagement_event(engagement_type: str, details: dict[str, Any] | None = None) -> Event:
    return {
        "name": "user_engagement",
        "params": {"engagement_type": engagement_type, "timestamp": _iso(), **(details or {})},
    }


def session_quality_event(actions: int, time_spent: int, pages_viewed: int) -> Event:
    return _event(
        "session_quality",
        quality_score=action_quality(actions, time_spent).value,
        total_actions=actions,
        session_duration=time_spent,
        pages_viewed=pages_viewed,
    )


def session_start_event(
    session_id: str,
    started_at: datetime,
    user_agent: str | None = None,
    screen_resolution: str | None = None,
) -> Event:
    return _event(
        "session_start",
        session_id=session_id,
        start_time=_iso(started_at),
        user_agent=user_agent,
        screen_resolution=screen_resolution,
    )


def session_end_event(
    session_id: str,
    duration: int,
    pages_viewed: int,
    interactions: int,
    ended_at: datetime,
) -> Event:
    return _event(
        "session_end",
        session_id=session_id,
        session_duration_seconds=duration,
        session_duration_minutes=round(duration / 60, 2),
        pages_viewed=pages_viewed,
        total_interactions=interactions,
        end_time=_iso(ended_at),
        session_quality=session_quality(duration, interactions, pages_viewed).value,
    )


def session_milestone_event(session_id: str, milestone_seconds: int, duration: int) -> Event:
    return _event(
        "session_milestone",
        session_id=session_id,
        milestone=session_milestone_label(milestone_seconds),
        session_duration_at_milestone=duration,
        timestamp=_iso(),
    )


# -----------------------------------------------------------------------------
# E-commerce and standard GA4 events
# -----------------------------------------------------------------------------

def view_item_event(value: float, items: list[dict[str, Any]], currency: str = DEFAULT_CURRENCY) -> Event:
    return _event("view_item", currency=currency, value=value, items=items)


def add_to_cart_event(value: float, items: list[dict[str, Any]], currency: str = DEFAULT_CURRENCY) -> Event:
    return _event("add_to_cart", currency=currency, value=value, items=items)


def purchase_event(
    transaction_id: str,
    value: float,
    items: list[dict[str, Any]],
    currency: str = DEFAULT_CURRENCY,
) -> Event:
    return _event("purchase", transaction_id=transaction_id, value=value, currency=currency, items=items)


def search_event(search_term: str) -> Event:
    return _event("search", search_term=search_term)


def share_event(content_type: str, item_id: str) -> Event:
    return _event("share", content_type=content_type, item_id=item_id)


def sign_up_event(method: str | None = None) -> Event:
    return _event("sign_up", method=method)


def login_event(method: str | None = None) -> Event:
    return _event("login", method=method)


def newsletter_signup_event(method: str = "website") -> Event:
    return _event("newsletter_signup", method=method)


# =============================================================================
# Dispatch
# =============================================================================

class AnalyticsService:
    """
    Ships events to GA4.

    With ANALYTICS_ASYNC the batch is handed to the Celery worker; otherwise
    it is sent inline. Either way failures are logged, never raised.
    """

    @staticmethod
    def dispatch(client_id: str, events: list[Event]) -> tuple[bool, bool | None]:
        """
        Send or enqueue a batch of events.

        Returns:
            (queued, delivered): delivered is None when the batch was queued
        """
        if not events:
            return False, True

        if settings.ANALYTICS_ASYNC:
            try:
                from workers.tasks import send_analytics_events

                send_analytics_events.delay(client_id, events)
                logger.debug(f"Queued {len(events)} analytics event(s) for {client_id}")
                return True, None
            except Exception as e:
                logger.warning(f"Could not queue analytics events, sending inline: {e}")

        return False, GAClient.send_events(client_id, events)

    @staticmethod
    def track(client_id: str | None, event: Event) -> None:
        """
        Fire-and-forget a single event on behalf of a server-side action.

        Anonymous actions (no client id) are not reported.
        """
        if not client_id:
            return
        try:
            AnalyticsService.dispatch(client_id, [event])
        except Exception as e:
            logger.error(f"Analytics event {event.get('name')} failed: {e}")
