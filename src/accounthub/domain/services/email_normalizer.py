"""Email normalization used for storage and uniqueness checks."""


def normalize_email(email: str | None) -> str | None:
    """Trim surrounding whitespace and lower-case an email address.

    Idempotent: ``normalize_email(normalize_email(e)) == normalize_email(e)``.

    Args:
        email: Raw email address, or None.

    Returns:
        The normalized address, or None when given None.
    """
    if email is None:
        return None
    return email.strip().lower()
