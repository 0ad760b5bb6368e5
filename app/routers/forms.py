# =============================================================================
# app/routers/forms.py - Contact and Newsletter Endpoints
# =============================================================================
# Public form submissions, plus the staff view of stored contact requests.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query

from app.auth import AuthUser, get_staff_user
from app.dependencies import GAClientIdDep
from core.models.forms import (
    ContactResponse,
    ContactSubmission,
    NewsletterResponse,
    NewsletterSignup,
    WhatsAppLink,
)
from core.services.forms_service import FormsService

contact_router = APIRouter()
newsletter_router = APIRouter()


@contact_router.post("", response_model=ContactResponse)
async def submit_contact(
    submission: ContactSubmission,
    ga_client_id: GAClientIdDep,
):
    """
    Submit the contact form.

    Returns 422 for missing or invalid fields and 502 SUBMISSION_FAILED
    when the submission could not be stored.
    """
    if submission.client_id is None:
        submission.client_id = ga_client_id
    return FormsService.submit_contact(submission)


@contact_router.get("/whatsapp", response_model=WhatsAppLink)
async def get_whatsapp_link():
    """
    Click-to-chat link with the prefilled enquiry message.
    """
    return FormsService.whatsapp()


@contact_router.get("/submissions")
async def list_contact_submissions(
    user: AuthUser = Depends(get_staff_user),
    limit: Annotated[int, Query(ge=1, le=200)] = 50,
) -> list[dict[str, Any]]:
    """
    Most recent contact submissions. Staff only.
    """
    return FormsService.list_contact_submissions(limit=limit)


@newsletter_router.post("", response_model=NewsletterResponse)
async def subscribe_newsletter(
    signup: NewsletterSignup,
    ga_client_id: GAClientIdDep,
):
    """
    Subscribe an email to the newsletter.

    Subscribing an address twice succeeds with already_subscribed=true.
    """
    if signup.client_id is None:
        signup.client_id = ga_client_id
    return FormsService.subscribe_newsletter(signup)
