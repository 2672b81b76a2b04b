"""
Submission cleaning and validation.

Runs before classification; nothing here touches the outside world.
"""
import uuid
from datetime import datetime, timezone
from typing import Optional
from .models import CleanLead, LeadSubmission


class LeadValidationError(ValueError):
    """Submission rejected before classification (client error)."""


def has_value(value: Optional[str]) -> bool:
    """True when the field is present and non-empty after trimming."""
    return value is not None and bool(value.strip())


def _clean(value: Optional[str]) -> Optional[str]:
    return value.strip() if has_value(value) else None


def is_honeypot(submission: LeadSubmission) -> bool:
    return has_value(submission.company_website)


def clean_submission(submission: LeadSubmission) -> CleanLead:
    message = _clean(submission.message)
    email = _clean(submission.email)
    phone = _clean(submission.phone)
    whatsapp = _clean(submission.whatsapp)

    if message is None:
        raise LeadValidationError("Message is required.")
    if email is None and phone is None and whatsapp is None:
        raise LeadValidationError("Provide at least one contact method: Email, Phone, or WhatsApp.")

    return CleanLead(message=message, email=email, phone=phone, whatsapp=whatsapp)


def is_likely_email(value: Optional[str]) -> bool:
    """Cheap plausibility check, not RFC validation."""
    v = (value or "").strip()
    return "@" in v and "." in v and len(v) >= 6


def new_lead_id() -> str:
    return f"lead_{uuid.uuid4().hex[:12]}"


def get_iso_timestamp() -> str:
    """UTC ISO-8601 timestamp with a Z suffix."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
