"""Helpers for keeping personal data out of log events."""

from __future__ import annotations


def mask_email(email: str) -> str:
    """Mask the local part of an email address for logging.

    Keeps the first character and the domain so events stay correlatable
    without recording the full address.

    Example:
        mask_email("dave@x.com") == "d***@x.com"
    """
    local, sep, domain = email.partition("@")
    if not sep or not local:
        return "***"
    return f"{local[0]}***@{domain}"
