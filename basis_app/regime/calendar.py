"""Economic calendar filtering for upcoming releases"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..data.models import EconomicEvent
from ..logging.config import get_logger

logger = get_logger(__name__)

MAJOR_EVENT_KEYS = ("CPI", "NFP", "FOMC", "PPI")


@dataclass(frozen=True)
class UpcomingEvent:
    """Calendar event with the days remaining until it"""
    event: EconomicEvent
    days_until: int


def upcoming_events(events: Iterable[EconomicEvent], today: date,
                    horizon_days: int = 14) -> list[UpcomingEvent]:
    """
    Events between today and the horizon (inclusive), soonest first

    Events with an unparseable date are skipped.
    """
    upcoming = []
    for event in events:
        try:
            event_date = date.fromisoformat(event.date)
        except ValueError:
            logger.warning("Skipping calendar event with invalid date", event_name=event.event, date=event.date)
            continue

        days = (event_date - today).days
        if 0 <= days <= horizon_days:
            upcoming.append(UpcomingEvent(event=event, days_until=days))

    return sorted(upcoming, key=lambda e: e.days_until)


def next_major_event(upcoming: Sequence[UpcomingEvent],
                     keys: Sequence[str] = MAJOR_EVENT_KEYS) -> Optional[UpcomingEvent]:
    """First upcoming event whose name contains a major release key"""
    return next(
        (item for item in upcoming if any(key in item.event.event for key in keys)),
        None,
    )


def news_type(upcoming: Sequence[UpcomingEvent],
              keys: Sequence[str] = MAJOR_EVENT_KEYS) -> str:
    major = next_major_event(upcoming, keys)
    return major.event.event if major else "Economic Data"
