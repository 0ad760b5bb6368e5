# =============================================================================
# core/services/forms_service.py - Contact and Newsletter Logic
# =============================================================================
# Stores public form submissions in Supabase and reports them to analytics.
# A stored submission is a success even if the analytics event fails.
# =============================================================================

import logging
from typing import Any

from app.config import settings
from app.exceptions import SubmissionFailedError
from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import whatsapp_link
from core.models.forms import (
    ContactResponse,
    ContactSubmission,
    NewsletterResponse,
    NewsletterSignup,
    WhatsAppLink,
)
from core.services import analytics_service as analytics
from core.services.analytics_service import AnalyticsService

logger = logging.getLogger(__name__)


class FormsService:
    """
    Service for the contact and newsletter forms.
    """

    @staticmethod
    def submit_contact(submission: ContactSubmission) -> ContactResponse:
        """
        Store a contact form submission.

        Raises:
            SubmissionFailedError: If the backend rejects the insert
        """
        try:
            SupabaseClient.insert_contact_submission(submission.to_row())
        except SupabaseClientError as e:
            logger.error(f"Contact submission failed: {e}")
            raise SubmissionFailedError("contact", e.message)

        logger.info(f"Contact submission stored ({submission.inquiry_type.value})")

        AnalyticsService.track(
            submission.client_id,
            analytics.form_submission_event(
                "Contact",
                {
                    "inquiry_type": submission.inquiry_type.value,
                    "has_company": "yes" if submission.company else "no",
                },
            ),
        )

        return ContactResponse()

    @staticmethod
    def subscribe_newsletter(signup: NewsletterSignup) -> NewsletterResponse:
        """
        Add an email to the newsletter list.

        An email that is already subscribed is reported as such, not as
        an error.

        Raises:
            SubmissionFailedError: If the backend rejects the insert
        """
        try:
            SupabaseClient.insert_newsletter_subscriber(
                {"email": signup.email, "method": signup.method}
            )
        except SupabaseClientError as e:
            if e.code == "DUPLICATE_SUBSCRIBER":
                logger.info("Newsletter signup for an existing subscriber")
                return NewsletterResponse(
                    already_subscribed=True,
                    message="You're already subscribed!",
                )
            logger.error(f"Newsletter signup failed: {e}")
            raise SubmissionFailedError("newsletter", e.message)

        AnalyticsService.track(signup.client_id, analytics.newsletter_signup_event(signup.method))

        return NewsletterResponse()

    @staticmethod
    def list_contact_submissions(limit: int = 50) -> list[dict[str, Any]]:
        """Recent submissions for staff (service key)."""
        return SupabaseClient.fetch_contact_submissions(limit=limit)

    @staticmethod
    def whatsapp() -> WhatsAppLink:
        return WhatsAppLink(
            url=whatsapp_link(settings.WHATSAPP_NUMBER, settings.WHATSAPP_MESSAGE),
            phone_number=settings.WHATSAPP_NUMBER,
            message=settings.WHATSAPP_MESSAGE,
        )
