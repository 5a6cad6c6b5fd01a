"""Input validation utilities for URL and email settings."""

import json
import re
from urllib.parse import urlparse


def validate_url(url: str) -> tuple[bool, str]:
    """Validate a URL string.

    Args:
        url: The URL to validate.

    Returns:
        Tuple of (is_valid, error_message).  error_message is empty on success.
    """
    if not url or not isinstance(url, str):
        return False, "URL is empty or not a string."
    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError as exc:
        return False, f"URL parse error: {exc}"
    if parsed.scheme not in ("http", "https"):
        return False, f"Invalid scheme: {parsed.scheme!r}. Must be http or https."
    if not parsed.netloc:
        return False, "URL has no network location (domain)."
    hostname = parsed.hostname or ""
    if not hostname or len(hostname) > 253:
        return False, "Invalid hostname length."
    return True, ""


def validate_email(email: str) -> tuple[bool, str]:
    """Validate an email address.

    Args:
        email: The email address to validate.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not email or not isinstance(email, str):
        return False, "Email is empty or not a string."
    email = email.strip()
    pattern = re.compile(
        r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@"
        r"[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
        r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
    )
    if not pattern.match(email):
        return False, "Email format is invalid."
    if len(email) > 320:
        return False, "Email exceeds maximum length (320 chars)."
    domain = email.split("@")[1]
    if "." not in domain:
        return False, "Email domain must contain at least one dot."
    return True, ""


def validate_json_ld(raw: str) -> tuple[bool, str]:
    """Check that *raw* decodes to a JSON object or array.

    Returns:
        Tuple of (is_valid, error_message).
    """
    if not raw or not raw.strip():
        return False, "JSON-LD is empty."
    try:
        decoded = json.loads(raw)
    except ValueError as exc:
        return False, f"Invalid JSON: {exc}"
    if not isinstance(decoded, (dict, list)):
        return False, "JSON-LD must be an object or an array."
    return True, ""
