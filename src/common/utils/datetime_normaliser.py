from datetime import date, datetime, timezone


def from_iso_string(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        raise ValueError("Stored datetime must be timezone-aware")
    return dt.astimezone(timezone.utc)


def to_date(value) -> date:
    """Reduce a date, datetime or ISO string to its calendar date.

    Aware timestamps are converted to UTC first so every date-only
    comparison happens on the same calendar.
    """
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValueError("date must not be empty")
        if "T" not in value and " " not in value:
            return date.fromisoformat(value)
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    raise ValueError(f"Unsupported date value: {value!r}")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def today() -> date:
    return utc_now().date()
