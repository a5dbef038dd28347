from datetime import UTC
from datetime import date
from datetime import datetime
from datetime import timedelta


def utc_today() -> date:
    """Return the current calendar date in UTC."""

    return datetime.now(UTC).date()


def contribution_window(days: int, today: date | None = None) -> tuple[date, date]:
    """Return the inclusive `(from, to)` range of `days` days ending today."""

    if days < 1:
        raise ValueError("window must cover at least one day")

    to_day = today if today is not None else utc_today()
    from_day = to_day - timedelta(days=days - 1)
    return from_day, to_day
