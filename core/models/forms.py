# =============================================================================
# core/models/forms.py - Contact and Newsletter Schemas
# =============================================================================
# Request/response contracts for the two public forms.
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field, field_validator

# Shape check only: something@domain.tld
EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class InquiryType(str, Enum):
    """Inquiry types offered on the contact form."""
    GENERAL = "general"
    B2B = "b2b"
    BULK = "bulk"
    PRIVATE_LABEL = "private-label"
    DISTRIBUTION = "distribution"
    RESEARCH = "research"

    @property
    def label(self) -> str:
        return INQUIRY_LABELS[self]


INQUIRY_LABELS = {
    InquiryType.GENERAL: "General Inquiry",
    InquiryType.B2B: "B2B Partnership",
    InquiryType.BULK: "Bulk Orders (500+ units)",
    InquiryType.PRIVATE_LABEL: "Private Label Manufacturing",
    InquiryType.DISTRIBUTION: "Distribution Partnership",
    InquiryType.RESEARCH: "Research Collaboration",
}


class ContactSubmission(BaseModel):
    """
    Contact form payload.

    Example:
        {
            "name": "Asha Rao",
            "email": "asha@example.com",
            "company": "Rao Pharmacy",
            "inquiry_type": "bulk",
            "subject": "Bulk order",
            "message": "We'd like 800 units of..."
        }
    """

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=320)
    company: str | None = Field(default=None, max_length=200)
    inquiry_type: InquiryType = InquiryType.GENERAL
    subject: str = Field(..., min_length=1, max_length=300)
    message: str = Field(..., min_length=1, max_length=5000)

    # Analytics client id, not persisted with the submission
    client_id: str | None = Field(default=None, exclude=True)

    @field_validator("name", "subject", "message", "company", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value

    def to_row(self) -> dict:
        """Row for the contact_submissions table."""
        row = self.model_dump(mode="json")
        if not row.get("company"):
            row.pop("company", None)
        return row


class ContactResponse(BaseModel):
    success: bool = True
    message: str = "Thank you for reaching out! We'll get back to you soon."


class NewsletterSignup(BaseModel):
    """Newsletter subscription payload."""

    email: str = Field(..., pattern=EMAIL_PATTERN, max_length=320)
    method: str = Field(default="website", max_length=50)
    client_id: str | None = Field(default=None, exclude=True)

    @field_validator("email", mode="before")
    @classmethod
    def _normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class NewsletterResponse(BaseModel):
    success: bool = True
    already_subscribed: bool = False
    message: str = "Thank you for subscribing!"


class WhatsAppLink(BaseModel):
    url: str
    phone_number: str
    message: str
