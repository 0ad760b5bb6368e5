# =============================================================================
# tests/test_forms.py - Contact and Newsletter Tests
# =============================================================================

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from app.exceptions import SubmissionFailedError
from core.models.forms import ContactSubmission, InquiryType, NewsletterSignup
from core.services.forms_service import FormsService
from lib.supabase_client import SupabaseClientError
from lib.utils import whatsapp_link


@pytest.fixture
def submission():
    return ContactSubmission(
        name="  Asha Rao ",
        email=" Asha@Example.COM ",
        company="",
        inquiry_type="bulk",
        subject="Bulk order",
        message="We'd like 800 units.",
        client_id="111.222",
    )


class TestContactSubmissionModel:

    def test_normalizes_fields(self, submission):
        assert submission.name == "Asha Rao"
        assert submission.email == "asha@example.com"
        assert submission.inquiry_type == InquiryType.BULK

    def test_row_drops_empty_company_and_client_id(self, submission):
        row = submission.to_row()

        assert "company" not in row
        assert "client_id" not in row
        assert row["inquiry_type"] == "bulk"

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            ContactSubmission(name="A", email="not-an-email", subject="S", message="M")

    def test_missing_message_rejected(self):
        with pytest.raises(ValidationError):
            ContactSubmission(name="A", email="a@b.co", subject="S", message="")

    def test_inquiry_label(self):
        assert InquiryType.PRIVATE_LABEL.label == "Private Label Manufacturing"


class TestSubmitContact:

    def test_success_tracks_form_submission(self, submission):
        with patch("core.services.forms_service.SupabaseClient") as db, \
                patch("core.services.forms_service.AnalyticsService") as tracker:
            response = FormsService.submit_contact(submission)

        assert response.success is True
        db.insert_contact_submission.assert_called_once()

        client_id, event = tracker.track.call_args.args
        assert client_id == "111.222"
        assert event["name"] == "contact_form_submission"
        assert event["params"]["inquiry_type"] == "bulk"
        assert event["params"]["has_company"] == "no"

    def test_backend_failure_raises_submission_failed(self, submission):
        with patch("core.services.forms_service.SupabaseClient") as db, \
                patch("core.services.forms_service.AnalyticsService") as tracker:
            db.insert_contact_submission.side_effect = SupabaseClientError("boom", code="INSERT_CONTACT_FAILED")

            with pytest.raises(SubmissionFailedError) as exc_info:
                FormsService.submit_contact(submission)

        assert exc_info.value.status_code == 502
        tracker.track.assert_not_called()

    def test_analytics_failure_does_not_fail_submission(self, submission):
        with patch("core.services.forms_service.SupabaseClient"), \
                patch("core.services.analytics_service.AnalyticsService.dispatch") as dispatch:
            dispatch.side_effect = RuntimeError("GA down")

            response = FormsService.submit_contact(submission)

        assert response.success is True


class TestNewsletter:

    def test_subscribe(self):
        with patch("core.services.forms_service.SupabaseClient") as db, \
                patch("core.services.forms_service.AnalyticsService") as tracker:
            response = FormsService.subscribe_newsletter(
                NewsletterSignup(email="reader@example.com", client_id="1.2")
            )

        db.insert_newsletter_subscriber.assert_called_once_with(
            {"email": "reader@example.com", "method": "website"}
        )
        assert response.success is True
        assert response.already_subscribed is False
        assert tracker.track.call_args.args[1]["name"] == "newsletter_signup"

    def test_duplicate_is_already_subscribed(self):
        with patch("core.services.forms_service.SupabaseClient") as db, \
                patch("core.services.forms_service.AnalyticsService"):
            db.insert_newsletter_subscriber.side_effect = SupabaseClientError(
                "Email is already subscribed", code="DUPLICATE_SUBSCRIBER"
            )

            response = FormsService.subscribe_newsletter(NewsletterSignup(email="reader@example.com"))

        assert response.success is True
        assert response.already_subscribed is True
        assert response.message == "You're already subscribed!"

    def test_other_failure_raises(self):
        with patch("core.services.forms_service.SupabaseClient") as db:
            db.insert_newsletter_subscriber.side_effect = SupabaseClientError("down", code="INSERT_SUBSCRIBER_FAILED")

            with pytest.raises(SubmissionFailedError):
                FormsService.subscribe_newsletter(NewsletterSignup(email="reader@example.com"))


class TestWhatsApp:

    def test_link_encodes_message(self):
        url = whatsapp_link("+91 96713 00080", "Hi! I'm interested")
        assert url == "https://wa.me/919671300080?text=Hi%21%20I%27m%20interested"

    def test_service_uses_settings(self):
        link = FormsService.whatsapp()
        assert link.url.startswith("https://wa.me/919671300080?text=")
        assert link.phone_number == "+919671300080"
