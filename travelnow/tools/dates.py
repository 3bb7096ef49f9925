from datetime import date, datetime, timedelta
from typing import Optional, Union


def get_todays_date() -> date:
    return datetime.now().date()


def add_days(day: date, days: int) -> date:
    return day + timedelta(days=days)


def parse_date(value: Union[str, date, None]) -> Optional[date]:
    """Parse YYYY-MM-DD (or a longer ISO timestamp). Empty input gives None."""
    if value is None or isinstance(value, date):
        return value
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.strptime(value[:10], "%Y-%m-%d").date()
    except ValueError:
        raise ValueError(f"Invalid date '{value}'. Use YYYY-MM-DD")
