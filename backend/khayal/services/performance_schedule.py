"""Splits performances into upcoming and previous lists relative to the current time."""

import logging
from datetime import date, datetime, time, timezone
from typing import Iterable, List, Optional, Tuple

from khayal.models.performance import Performance

log = logging.getLogger(__name__)


def parse_performance_date(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO date ("2025-05-01") or ISO datetime into an aware UTC datetime.

    A bare date means midnight UTC; a datetime without an offset is taken as
    UTC. Returns None when unparseable.
    """
    if not value:
        return None
    value = value.strip()
    try:
        return datetime.combine(date.fromisoformat(value), time.min, tzinfo=timezone.utc)
    except ValueError:
        pass
    try:
        parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def partition_performances(
    performances: Iterable[Performance],
    now: Optional[datetime] = None,
) -> Tuple[List[Performance], List[Performance]]:
    """
    Return (upcoming, previous).

    Upcoming holds performances starting at or after ``now``, soonest first;
    previous holds earlier ones, most recent first. A date-only performance
    starts at midnight UTC, so once that day has begun it is previous.
    """
    now = now or datetime.now(timezone.utc)
    upcoming: List[Tuple[datetime, Performance]] = []
    previous: List[Tuple[datetime, Performance]] = []

    for performance in performances:
        when = parse_performance_date(performance.date)
        if when is None:
            log.warning(f"Skipping performance {performance.id} with unparseable date '{performance.date}'")
            continue
        if when >= now:
            upcoming.append((when, performance))
        else:
            previous.append((when, performance))

    upcoming.sort(key=lambda pair: pair[0])
    previous.sort(key=lambda pair: pair[0], reverse=True)
    return [p for _, p in upcoming], [p for _, p in previous]
