# =============================================================================
# core/services/session_tracker.py - Visitor Session Tracking
# =============================================================================
# Keeps per-visit counters (pages viewed, interactions, milestones) in the
# visitor_sessions table and emits the matching GA4 events.
#
# Flow:
#   start_session -> record_page_view / record_interaction / record_scroll
#   / record_visibility -> end_session
#
# Every call also reports session milestones (30s, 1min, 2min, 5min, 10min)
# that have become due since the last call. Once a session has ended its
# row is frozen: later calls return it without writing or sending events.
#
# Rows carry a version number. Updates only land when the stored version is
# the one that was read, so concurrent requests for the same session retry
# instead of overwriting each other's counters.
# =============================================================================

import logging
from datetime import datetime
from typing import Any, Callable
from uuid import uuid4

import pandas as pd

from lib.supabase_client import SupabaseClient
from lib.utils import utc_now
from core.models.analytics import (
    InteractionRequest,
    PageViewRequest,
    ScrollRequest,
    SessionStartRequest,
    SessionStatusResponse,
    SessionSummary,
    VisibilityRequest,
    VisitorSession,
)
from core.services import analytics_service as analytics
from core.services.analytics_service import AnalyticsService
from app.exceptions import VisitorSessionConflictError, VisitorSessionNotFoundError

logger = logging.getLogger(__name__)

# Element text is truncated before it is sent to GA
MAX_ELEMENT_TEXT = 50

# Conditional writes retried before giving up with a 409
MAX_WRITE_ATTEMPTS = 3

Event = dict[str, Any]


def session_duration(session: VisitorSession, now: datetime | None = None) -> int:
    """Whole seconds since the session started (frozen once it has ended)."""
    if session.duration_seconds is not None and session.ended_at is not None:
        return session.duration_seconds
    elapsed = ((now or utc_now()) - session.started_at).total_seconds()
    return max(0, int(elapsed))


class SessionTracker:
    """
    Service for server-side visitor session tracking.

    All methods take an optional `now` so tests can control the clock.
    """

    # -------------------------------------------------------------------------
    # Persistence helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _load(session_id: str) -> VisitorSession:
        row = SupabaseClient.fetch_visitor_session(session_id)
        if not row:
            raise VisitorSessionNotFoundError(session_id)
        return VisitorSession.model_validate(row)

    @staticmethod
    def _save_if_unchanged(session: VisitorSession) -> bool:
        """Write the session if nobody else has since the load. Bumps the version."""
        expected = session.version
        session.version = expected + 1
        row = SupabaseClient.update_visitor_session(
            session.model_dump(mode="json"),
            expected_version=expected,
        )
        if row is None:
            session.version = expected
            return False
        return True

    @staticmethod
    def _update(
        session_id: str,
        apply: Callable[[VisitorSession], tuple[list[Event], bool]],
        now: datetime,
    ) -> SessionStatusResponse:
        """
        Load a session, apply a change and write it back.

        `apply` mutates the session and returns the events to send plus
        whether anything needs saving. The write is conditional on the
        version that was loaded; when another request got there first the
        session is reloaded and `apply` runs again on the fresh row. Ended
        sessions are returned as they are.
        """
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            session = SessionTracker._load(session_id)
            if session.ended_at is not None:
                return SessionTracker._respond(session, [], now)

            events, changed = apply(session)
            if not changed or SessionTracker._save_if_unchanged(session):
                return SessionTracker._respond(session, events, now)

            logger.warning(
                f"Visitor session {session_id} changed during update "
                f"(attempt {attempt}/{MAX_WRITE_ATTEMPTS})"
            )

        raise VisitorSessionConflictError(session_id, MAX_WRITE_ATTEMPTS)

    @staticmethod
    def _respond(
        session: VisitorSession,
        events: list[dict[str, Any]],
        now: datetime,
    ) -> SessionStatusResponse:
        if events:
            AnalyticsService.dispatch(session.client_id, events)

        duration = session_duration(session, now)
        return SessionStatusResponse(
            session=session,
            duration_seconds=duration,
            duration_minutes=round(duration / 60, 2),
            quality=analytics.session_quality(duration, session.interactions, session.page_count),
            events_sent=[e["name"] for e in events],
        )

    @staticmethod
    def _milestone_events(session: VisitorSession, now: datetime) -> list[dict[str, Any]]:
        """Record and build events for milestones that are now due."""
        duration = session_duration(session, now)
        due = analytics.due_session_milestones(duration, session.milestones)
        session.milestones.extend(due)
        return [
            analytics.session_milestone_event(session.session_id, m, duration)
            for m in due
        ]

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    @staticmethod
    def start_session(request: SessionStartRequest, now: datetime | None = None) -> SessionStatusResponse:
        """
        Start a new visitor session.

        The landing page counts as the first page view.
        """
        now = now or utc_now()
        session = VisitorSession(
            session_id=analytics.make_session_id(now, uuid4().hex[:6]),
            client_id=request.client_id,
            started_at=now,
            page_count=1,
            interactions=0,
            landing_page=request.landing_page,
            last_page=request.landing_page,
        )
        SupabaseClient.upsert_visitor_session(session.model_dump(mode="json"))
        logger.info(f"Started visitor session {session.session_id}")

        events = [
            analytics.session_start_event(
                session.session_id,
                now,
                user_agent=request.user_agent,
                screen_resolution=request.screen_resolution,
            )
        ]
        return SessionTracker._respond(session, events, now)

    @staticmethod
    def check_milestones(session_id: str, now: datetime | None = None) -> SessionStatusResponse:
        """Current counters and quality, reporting any due milestones."""
        now = now or utc_now()

        def apply(session: VisitorSession) -> tuple[list[Event], bool]:
            events = SessionTracker._milestone_events(session, now)
            return events, bool(events)

        return SessionTracker._update(session_id, apply, now)

    @staticmethod
    def record_page_view(
        session_id: str,
        request: PageViewRequest,
        now: datetime | None = None,
    ) -> SessionStatusResponse:
        """
        Count a page view.

        When the browser reports how long it spent on the previous page,
        time-on-page (and possibly bounce) events are emitted for it.
        """
        now = now or utc_now()

        def apply(session: VisitorSession) -> tuple[list[Event], bool]:
            events: list[Event] = []

            if request.previous_page and request.time_on_previous_page is not None:
                events.extend(
                    analytics.time_on_page_events(
                        request.previous_page,
                        request.time_on_previous_page,
                        request.interactions_on_previous_page,
                        session_duration(session, now),
                    )
                )

            session.page_count += 1
            session.last_page = request.page

            if request.page_name:
                events.append(analytics.page_visit_event(request.page_name, {"page_path": request.page}))

            events.extend(SessionTracker._milestone_events(session, now))
            return events, True

        return SessionTracker._update(session_id, apply, now)

    @staticmethod
    def record_interaction(
        session_id: str,
        request: InteractionRequest,
        now: datetime | None = None,
    ) -> SessionStatusResponse:
        """
        Count an interaction (click, input, change, submit).

        Only interactions on buttons, links and form controls are reported
        to GA as user_engagement events.
        """
        now = now or utc_now()
        element_type = request.element_type.lower()

        def apply(session: VisitorSession) -> tuple[list[Event], bool]:
            session.interactions += 1

            events: list[Event] = []
            if element_type in analytics.TRACKED_ELEMENTS:
                events.append(
                    analytics.user_engagement_event(
                        "interaction",
                        {
                            "element_type": element_type,
                            "element_text": request.element_text[:MAX_ELEMENT_TEXT],
                            "page": request.page or session.last_page,
                            "total_interactions": session.interactions,
                            "session_duration": session_duration(session, now),
                        },
                    )
                )

            events.extend(SessionTracker._milestone_events(session, now))
            return events, True

        return SessionTracker._update(session_id, apply, now)

    @staticmethod
    def record_scroll(
        session_id: str,
        request: ScrollRequest,
        now: datetime | None = None,
    ) -> SessionStatusResponse:
        """Report scroll-depth milestones newly crossed on a page."""
        now = now or utc_now()

        def apply(session: VisitorSession) -> tuple[list[Event], bool]:
            reached = session.scroll_milestones.setdefault(request.page, [])
            crossed = analytics.new_scroll_milestones(request.scroll_percent, reached)
            reached.extend(crossed)

            events = [analytics.scroll_depth_event(m, request.page) for m in crossed]
            events.extend(SessionTracker._milestone_events(session, now))
            return events, bool(events)

        return SessionTracker._update(session_id, apply, now)

    @staticmethod
    def record_visibility(
        session_id: str,
        request: VisibilityRequest,
        now: datetime | None = None,
    ) -> SessionStatusResponse:
        """
        Report the tab being hidden or shown again.

        Sends a page_hidden or page_visible user_engagement event. Counters
        are untouched; the row is only written when a milestone fell due.
        """
        now = now or utc_now()

        def apply(session: VisitorSession) -> tuple[list[Event], bool]:
            details: dict[str, Any] = {
                "page": request.page or session.last_page,
                "total_session_duration": session_duration(session, now),
            }
            if request.hidden:
                details["time_before_hide"] = request.time_on_page or 0
                engagement_type = "page_hidden"
            else:
                engagement_type = "page_visible"

            milestones = SessionTracker._milestone_events(session, now)
            events = [analytics.user_engagement_event(engagement_type, details), *milestones]
            return events, bool(milestones)

        return SessionTracker._update(session_id, apply, now)

    @staticmethod
    def end_session(session_id: str, now: datetime | None = None) -> SessionStatusResponse:
        """
        End a session and report its totals.

        Ending an already ended session returns it unchanged.
        """
        now = now or utc_now()

        def apply(session: VisitorSession) -> tuple[list[Event], bool]:
            duration = session_duration(session, now)
            session.ended_at = now
            session.duration_seconds = duration
            session.quality = analytics.session_quality(duration, session.interactions, session.page_count)

            events = [
                analytics.session_end_event(
                    session.session_id,
                    duration,
                    session.page_count,
                    session.interactions,
                    now,
                ),
                analytics.session_quality_event(session.interactions, duration, session.page_count),
            ]
            return events, True

        response = SessionTracker._update(session_id, apply, now)
        if response.events_sent:
            logger.info(
                f"Ended visitor session {session_id}: {response.duration_seconds}s, "
                f"{response.session.page_count} pages, quality {response.quality.value}"
            )
        return response

    @staticmethod
    def summary(limit: int = 500) -> SessionSummary:
        """Dashboard numbers over the most recent sessions."""
        return summarize_sessions(SupabaseClient.fetch_visitor_sessions(limit=limit))


# =============================================================================
# Dashboard Aggregation
# =============================================================================

SUMMARY_COLUMNS = [
    "session_id",
    "page_count",
    "interactions",
    "ended_at",
    "duration_seconds",
    "quality",
    "landing_page",
]


def summarize_sessions(rows: list[dict[str, Any]], top_pages: int = 5) -> SessionSummary:
    """
    Aggregate visitor session rows.

    Averages for pages and interactions cover every session; the average
    duration and the quality breakdown only cover ended sessions.
    """
    if not rows:
        return SessionSummary()

    df = pd.DataFrame(rows).reindex(columns=SUMMARY_COLUMNS)
    completed = df[df["ended_at"].notna()]

    durations = pd.to_numeric(completed["duration_seconds"], errors="coerce").dropna()
    pages = pd.to_numeric(df["page_count"], errors="coerce").fillna(0)
    interactions = pd.to_numeric(df["interactions"], errors="coerce").fillna(0)

    quality_counts = completed["quality"].dropna().value_counts()
    landing_counts = df["landing_page"].dropna().value_counts().head(top_pages)

    return SessionSummary(
        total_sessions=len(df),
        completed_sessions=len(completed),
        avg_duration_seconds=round(float(durations.mean()), 1) if not durations.empty else 0.0,
        avg_pages=round(float(pages.mean()), 1),
        avg_interactions=round(float(interactions.mean()), 1),
        quality_breakdown={str(k): int(v) for k, v in quality_counts.items()},
        top_landing_pages={str(k): int(v) for k, v in landing_counts.items()},
    )
