"""Due-date lookup window derived from tenant policy"""

from datetime import date, timedelta
from typing import Tuple
from boleto_gateway.utils.date_utils import format_date_br


def compute_lookup_window(today: date, days_before_due: int, days_after_due: int) -> Tuple[str, str]:
    """
    Inclusive window [today - days_before_due, today + days_after_due].

    Returns:
        (start, end) formatted DD/MM/YYYY for the SGA boleto lookup
    """
    start = today - timedelta(days=days_before_due)
    end = today + timedelta(days=days_after_due)
    return format_date_br(start), format_date_br(end)
