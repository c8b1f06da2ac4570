"""Date manipulation utilities"""

from datetime import date, datetime, timezone


def today_utc() -> date:
    """Current calendar date in UTC"""
    return datetime.now(timezone.utc).date()


def format_date_br(value: date) -> str:
    """Format as DD/MM/YYYY (the ERP's wire format)"""
    return value.strftime("%d/%m/%Y")


def parse_date(text: str) -> date:
    """
    Parse an ERP date in either DD/MM/YYYY or YYYY-MM-DD form.

    Raises:
        ValueError: If the text matches neither encoding
    """
    trimmed = text.strip()
    if "-" in trimmed:
        return datetime.strptime(trimmed, "%Y-%m-%d").date()
    return datetime.strptime(trimmed, "%d/%m/%Y").date()


def days_between(later: date, earlier: date) -> int:
    """Whole calendar days from earlier to later (negative if later precedes earlier)"""
    return (later - earlier).days
