from datetime import datetime, timezone
from typing import Optional

from gradebook.core.config.settings import get_settings

def get_utc_now() -> datetime:
    """Get current UTC datetime"""
    return datetime.now(timezone.utc)

def format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime to ISO format, passing None through"""
    return dt.isoformat() if dt is not None else None

def round_score(value: Optional[float], decimals: Optional[int] = None) -> Optional[float]:
    """
    Round a score to the configured number of decimals

    Args:
        value: Score to round, None is passed through
        decimals: Override of the SCORE_DECIMALS setting

    Returns:
        Rounded score or None
    """
    if value is None:
        return None
    if decimals is None:
        decimals = get_settings().SCORE_DECIMALS
    return round(float(value), decimals)
