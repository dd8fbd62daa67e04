"""
Quarterly expiration date arithmetic.

Equity index futures and their quarterly options expire on the third Friday
of March, June, September and December. Days-to-expiration feeds the carry
formula and is never allowed to reach zero.
"""

import math
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from ..data.models import CarryParams

QUARTERLY_MONTHS = (3, 6, 9, 12)
FRIDAY = 4  # date.weekday()


@dataclass(frozen=True)
class Expiration:
    """Next quarterly expiration and the whole days left until it."""
    date: date
    days_remaining: int

    @property
    def iso_date(self) -> str:
        return self.date.isoformat()


def third_friday(year: int, month: int) -> date:
    """
    Third Friday of a month.

    Steps forward from the 1st to the first Friday, then adds two weeks, so
    the result always falls on day 15-21.
    """
    day = date(year, month, 1)
    while day.weekday() != FRIDAY:
        day += timedelta(days=1)
    return day + timedelta(days=14)


def next_quarterly_month(year: int, month: int) -> tuple[int, int]:
    """
    First quarterly month strictly after the given month.

    Calling during an expiration month rolls to the following quarter.
    """
    for candidate in QUARTERLY_MONTHS:
        if candidate > month:
            return year, candidate
    return year + 1, QUARTERLY_MONTHS[0]


def days_until(target: date, now: datetime) -> int:
    """Whole days from now until midnight of target, rounded up and floored at 1."""
    target_start = datetime(target.year, target.month, target.day, tzinfo=now.tzinfo)
    remaining = (target_start - now).total_seconds() / 86400
    return max(math.ceil(remaining), 1)


def next_quarterly_expiration(now: Optional[datetime] = None) -> Expiration:
    """
    Next quarterly expiration after the current month.

    Args:
        now: Reference time, defaults to the current UTC time

    Returns:
        Expiration with the third-Friday date and days remaining (>= 1)
    """
    if now is None:
        now = datetime.now(timezone.utc)

    year, month = next_quarterly_month(now.year, now.month)
    expiration_date = third_friday(year, month)

    return Expiration(date=expiration_date, days_remaining=days_until(expiration_date, now))


def refresh_carry_params(params: CarryParams, now: Optional[datetime] = None) -> CarryParams:
    """
    Roll days-to-expiration forward for the current time.

    Returns the same params object when the expiration and day count are
    unchanged, otherwise a copy with the new values.
    """
    expiration = next_quarterly_expiration(now)
    if (params.days_to_exp == expiration.days_remaining
            and params.next_expiration == expiration.iso_date):
        return params

    return replace(
        params,
        days_to_exp=expiration.days_remaining,
        next_expiration=expiration.iso_date,
    )
