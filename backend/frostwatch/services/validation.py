import re

from frostwatch.core.errors import ValidationError

# local@domain.tld, no whitespace and a single @
EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# ASCII digits only; \d would also accept other scripts
ZIP_RE = re.compile(r"[0-9]{5}")


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def is_valid_email(email: str | None) -> bool:
    return bool(EMAIL_RE.fullmatch(normalize_email(email)))


def is_valid_zip(zip_code: str | None) -> bool:
    return isinstance(zip_code, str) and bool(ZIP_RE.fullmatch(zip_code))


def validate_subscription_request(payload: dict) -> tuple[str, str]:
    """
    Expected payload keys (from the sign-up form):
      email, zipCode
    Returns (normalized email, zip code) or raises ValidationError.
    """
    email = payload.get("email")
    zip_code = payload.get("zipCode")

    if not email or not zip_code:
        raise ValidationError("Email and ZIP code are required")
    if not isinstance(email, str) or not is_valid_email(email):
        raise ValidationError("Invalid email format")
    if not is_valid_zip(zip_code):
        raise ValidationError("Invalid ZIP code format")

    return normalize_email(email), zip_code


def validate_email_only(payload: dict) -> str:
    email = payload.get("email")
    if not email:
        raise ValidationError("Email is required")
    if not isinstance(email, str) or not is_valid_email(email):
        raise ValidationError("Invalid email format")
    return normalize_email(email)
