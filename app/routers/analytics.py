# =============================================================================
# app/routers/analytics.py - Visitor Analytics Endpoints
# =============================================================================
# The browser tracker reports raw events and session activity here; the
# API keeps session counters and forwards events to GA4.
#
# Session endpoints return the current counters and the names of the
# events sent on the visitor's behalf.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query

from app.auth import AuthUser, get_staff_user
from core.models.analytics import (
    EventBatch,
    EventDispatchResponse,
    InteractionRequest,
    PageViewRequest,
    ScrollRequest,
    SessionStartRequest,
    SessionStatusResponse,
    SessionSummary,
    VisibilityRequest,
)
from core.services.analytics_service import AnalyticsService
from core.services.session_tracker import SessionTracker
from lib.ga_client import GAClient

router = APIRouter()
debug_router = APIRouter()

SessionIdPath = Annotated[str, Path(description="Visitor session ID")]


# =============================================================================
# Events
# =============================================================================

@router.post("/events", response_model=EventDispatchResponse)
async def report_events(batch: EventBatch):
    """
    Forward a batch of browser events to GA4.

    Events are dropped silently when GA is not configured; delivery
    failures never surface as errors.
    """
    events = [event.model_dump() for event in batch.events]
    queued, delivered = AnalyticsService.dispatch(batch.client_id, events)
    return EventDispatchResponse(accepted=len(events), queued=queued, delivered=delivered)


# =============================================================================
# Sessions
# =============================================================================

@router.post("/sessions", response_model=SessionStatusResponse, status_code=201)
async def start_session(request: SessionStartRequest):
    """
    Start a visitor session. The landing page counts as the first page view.
    """
    return SessionTracker.start_session(request)


@router.get("/sessions/{session_id}", response_model=SessionStatusResponse)
async def get_session(session_id: SessionIdPath):
    """
    Current session counters and quality.

    Polling this endpoint also reports any duration milestones reached
    since the last call.
    """
    return SessionTracker.check_milestones(session_id)


@router.post("/sessions/{session_id}/page-view", response_model=SessionStatusResponse)
async def record_page_view(session_id: SessionIdPath, request: PageViewRequest):
    """Count a page view and report time spent on the previous page."""
    return SessionTracker.record_page_view(session_id, request)


@router.post("/sessions/{session_id}/interaction", response_model=SessionStatusResponse)
async def record_interaction(session_id: SessionIdPath, request: InteractionRequest):
    """Count a click, input, change or submit."""
    return SessionTracker.record_interaction(session_id, request)


@router.post("/sessions/{session_id}/scroll", response_model=SessionStatusResponse)
async def record_scroll(session_id: SessionIdPath, request: ScrollRequest):
    """Report scroll depth milestones (25/50/75/90%) crossed on a page."""
    return SessionTracker.record_scroll(session_id, request)


@router.post("/sessions/{session_id}/visibility", response_model=SessionStatusResponse)
async def record_visibility(session_id: SessionIdPath, request: VisibilityRequest):
    """Report the tab being hidden or shown again."""
    return SessionTracker.record_visibility(session_id, request)


@router.post("/sessions/{session_id}/end", response_model=SessionStatusResponse)
async def end_session(session_id: SessionIdPath):
    """
    End the session and report its duration and quality.

    Ending a session twice returns the first result.
    """
    return SessionTracker.end_session(session_id)


@router.get("/summary", response_model=SessionSummary)
async def session_summary(
    user: AuthUser = Depends(get_staff_user),
    limit: Annotated[int, Query(ge=1, le=5000, description="Most recent sessions to include")] = 500,
):
    """
    Aggregate numbers over recent sessions. Staff only.
    """
    return SessionTracker.summary(limit=limit)


# =============================================================================
# Debug
# =============================================================================

@debug_router.get("/ga")
async def ga_debug() -> dict[str, Any]:
    """
    GA configuration as the server sees it. The API secret is never shown.
    """
    return GAClient.debug_status()
