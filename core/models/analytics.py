# =============================================================================
# core/models/analytics.py - Analytics Schemas
# =============================================================================
# These models define the contract between the browser tracker and the API:
# - AnalyticsEvent / EventBatch: raw events forwarded to GA4
# - VisitorSession: server-side session counters (page views, interactions)
# - SessionQuality: low / medium / high heuristic bucket
# - SessionSummary: aggregated dashboard numbers
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SessionQuality(str, Enum):
    """
    Heuristic session quality bucket.

    Derived from duration, interactions and pages viewed; see
    core.services.analytics.session_quality.
    """
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class AnalyticsEvent(BaseModel):
    """
    A single event as the browser reports it.

    Example:
        {"name": "health_condition_click", "params": {"condition": "sleep"}}
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=40,
        pattern=r"^[A-Za-z][A-Za-z0-9_]*$",
        description="GA4 event name"
    )
    params: dict[str, Any] = Field(default_factory=dict)


class EventBatch(BaseModel):
    """Events reported together by one browser."""

    client_id: str = Field(..., min_length=1, description="GA client id (cookie)")
    events: list[AnalyticsEvent] = Field(..., min_length=1, max_length=100)


class EventDispatchResponse(BaseModel):
    accepted: int
    queued: bool = Field(default=False, description="Sent through the background worker")
    delivered: bool | None = Field(
        default=None,
        description="Inline delivery result (None when queued)"
    )


class SessionStartRequest(BaseModel):
    client_id: str = Field(..., min_length=1)
    user_agent: str | None = None
    screen_resolution: str | None = Field(default=None, examples=["1920x1080"])
    landing_page: str | None = None


class PageViewRequest(BaseModel):
    page: str = Field(..., description="Path of the page being viewed")
    page_name: str | None = Field(default=None, description="Human page name, e.g. 'Contact'")
    previous_page: str | None = None
    time_on_previous_page: int | None = Field(
        default=None,
        ge=0,
        description="Seconds spent on previous_page"
    )
    interactions_on_previous_page: int = Field(default=0, ge=0)


class ScrollRequest(BaseModel):
    page: str
    scroll_percent: int = Field(..., ge=0, le=100)


class InteractionRequest(BaseModel):
    element_type: str = Field(..., examples=["button"])
    element_text: str = ""
    page: str | None = None


class VisibilityRequest(BaseModel):
    hidden: bool = Field(..., description="True when the tab was hidden, false when it came back")
    page: str | None = None
    time_on_page: int | None = Field(
        default=None,
        ge=0,
        description="Seconds on the page before it was hidden"
    )


class VisitorSession(BaseModel):
    """Server-side counters for one browsing session."""

    session_id: str
    client_id: str
    started_at: datetime
    page_count: int = 1
    interactions: int = 0
    landing_page: str | None = None
    last_page: str | None = None
    ended_at: datetime | None = None
    duration_seconds: int | None = None
    quality: SessionQuality | None = None
    milestones: list[int] = Field(default_factory=list)
    scroll_milestones: dict[str, list[int]] = Field(default_factory=dict)
    version: int = Field(0, description="Bumped on every write; guards concurrent updates")


class SessionStatusResponse(BaseModel):
    session: VisitorSession
    duration_seconds: int
    duration_minutes: float
    quality: SessionQuality
    events_sent: list[str] = Field(default_factory=list)


class SessionSummary(BaseModel):
    """Aggregated numbers for the staff session dashboard."""

    total_sessions: int = 0
    completed_sessions: int = 0
    avg_duration_seconds: float = 0.0
    avg_pages: float = 0.0
    avg_interactions: float = 0.0
    quality_breakdown: dict[str, int] = Field(default_factory=dict)
    top_landing_pages: dict[str, int] = Field(default_factory=dict)
