"""Small normalisers shared by the Settings field validators."""


def to_uppercase(value: str | None) -> str | None:
    """Uppercase a string, passing None (and non-strings) through untouched."""
    if not isinstance(value, str):
        return value
    return value.strip().upper()


def to_lowercase(value: str | None) -> str | None:
    """Lowercase a string, passing None (and non-strings) through untouched."""
    if not isinstance(value, str):
        return value
    return value.strip().lower()


def blank_to_none(value):
    """
    Treat an empty/whitespace env value as "not configured".

    `.env` templates often ship keys with no value (e.g. `TEST_POSTGRES_DB=`);
    without this, pydantic would keep "" as a real value.
    """
    if isinstance(value, str) and not value.strip():
        return None
    return value
