import pytest

from frostwatch.core.errors import ValidationError
from frostwatch.services.validation import is_valid_email, is_valid_zip, validate_subscription_request


@pytest.mark.parametrize(
    "email,expected",
    [
        ("user@example.com", True),
        ("User.Name+tag@example.co.uk", True),
        ("  user@example.com  ", True),  # trims spaces
        ("bademail", False),
        ("", False),
        (None, False),
        ("user@no-tld", False),
        ("user @example.com", False),
        ("user@@example.com", False),
        ("@example.com", False),
        ("user@example.com\nBcc: x@evil.com", False),
    ],
)
def test_is_valid_email(email, expected):
    assert is_valid_email(email) is expected


@pytest.mark.parametrize(
    "zip_code,expected",
    [
        ("60601", True),
        ("05401", True),
        ("6060", False),
        ("606011", False),
        ("60601-1234", False),
        ("6060a", False),
        (" 60601", False),
        ("", False),
        ("60601\n", False),  # trailing newline
        ("\u0666\u0660\u0666\u0660\u0661", False),  # Arabic-Indic digits
        ("\uff16\uff10\uff16\uff10\uff11", False),  # fullwidth digits
        (60601, False),
    ],
)
def test_is_valid_zip(zip_code, expected):
    assert is_valid_zip(zip_code) is expected


def test_validate_subscription_request_normalizes_email():
    email, zip_code = validate_subscription_request({"email": " Gardener@Example.COM ", "zipCode": "60601"})
    assert email == "gardener@example.com"
    assert zip_code == "60601"


def test_validate_subscription_request_requires_both_fields():
    with pytest.raises(ValidationError, match="required"):
        validate_subscription_request({"email": "a@b.co"})
