# -*- coding: utf-8 -*-
"""
Date range helpers for listings and monthly summaries
"""
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

from oficina.models import Period


def start_of_week(day: date) -> date:
    """Monday of the week containing day"""
    return day - timedelta(days=day.weekday())


def period_bounds(period: Period, now: Optional[datetime] = None) -> Tuple[Optional[date], date]:
    """First and last day of a listing period. ALL has no lower bound."""
    today = (now or datetime.now()).date()
    if period == Period.TODAY:
        return today, today
    if period == Period.WEEK:
        return start_of_week(today), today
    if period == Period.MONTH:
        return today.replace(day=1), today
    if period == Period.YEAR:
        return today.replace(month=1, day=1), today
    return None, today


def _as_date(value: Union[date, datetime]) -> date:
    return value.date() if isinstance(value, datetime) else value


def in_range(value: Optional[Union[date, datetime]], start: Optional[date], end: Optional[date]) -> bool:
    if value is None:
        return False
    day = _as_date(value)
    if start and day < start:
        return False
    if end and day > end:
        return False
    return True


def same_month(value: Optional[Union[date, datetime]], reference: Union[date, datetime]) -> bool:
    if value is None:
        return False
    return value.year == reference.year and value.month == reference.month
