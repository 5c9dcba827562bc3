"""
BodyScore — Snapshot History Helpers
Daily averages over previously published snapshots, for trend views.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Iterable, Optional

from bodyscore.models import ScoreSnapshot


@dataclass(frozen=True)
class DailyAverage:
    day: date
    body_score: float
    confidence_score: float
    samples: int


def daily_averages(
    snapshots: Iterable[ScoreSnapshot],
    days: int = 30,
    now: Optional[datetime] = None,
) -> list[DailyAverage]:
    """
    Average body and confidence scores per UTC calendar day over the last
    `days` days, oldest first.
    """
    end = now or datetime.now(timezone.utc)
    if end.tzinfo is None:
        end = end.replace(tzinfo=timezone.utc)
    start = end - timedelta(days=days)

    by_day: dict[date, list[ScoreSnapshot]] = defaultdict(list)
    for snapshot in snapshots:
        ts = snapshot.timestamp
        if ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        if start <= ts <= end:
            by_day[ts.astimezone(timezone.utc).date()].append(snapshot)

    return [
        DailyAverage(
            day=day,
            body_score=sum(s.body_score for s in items) / len(items),
            confidence_score=sum(s.confidence_score for s in items) / len(items),
            samples=len(items),
        )
        for day, items in sorted(by_day.items())
    ]
