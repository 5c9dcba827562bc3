"""
BodyScore — Scoring Session
Holds the current profile, preferences and raw readings for one user and
re-runs the full aggregation after every change. Category batches are only
swapped in once complete, so the calculator never sees a half-updated category.
"""

import asyncio
import logging
from collections import defaultdict
from typing import Awaitable, Callable, Iterable, Mapping, Optional

from bodyscore.aggregation import BodyScoreCalculator, body_score_calculator
from bodyscore.config import settings
from bodyscore.models import HealthCategory, Metric, MetricReading, Profile, ScoreSnapshot
from bodyscore.normalizers import NormalizerProvider
from bodyscore.preferences import Preferences

log = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Iterable[MetricReading]]]
Listener = Callable[[ScoreSnapshot], None]


class ScoringSession:

    def __init__(
        self,
        profile: Optional[Profile] = None,
        preferences: Optional[Preferences] = None,
        calculator: Optional[BodyScoreCalculator] = None,
    ):
        self._profile = profile or Profile.unknown()
        self._provider = NormalizerProvider(self._profile)
        self.preferences = preferences or Preferences.from_preset(settings.DEFAULT_PRESET)
        self.calculator = calculator or body_score_calculator

        self._readings: dict[HealthCategory, list[MetricReading]] = {}
        self._metrics: list[Metric] = []
        self._listeners: list[Listener] = []
        self._generation = 0
        self.latest: Optional[ScoreSnapshot] = None

    # ── State ────────────────────────────────────────────────────────────────

    @property
    def profile(self) -> Profile:
        return self._profile

    @property
    def metrics(self) -> list[Metric]:
        return list(self._metrics)

    def subscribe(self, listener: Listener) -> None:
        """Register a collaborator that receives every published snapshot."""
        self._listeners.append(listener)

    # ── Triggers ─────────────────────────────────────────────────────────────

    def set_profile(self, profile: Profile) -> ScoreSnapshot:
        self._profile = profile
        self._provider = NormalizerProvider(profile)
        return self.recompute()

    def update_weight(self, category: HealthCategory, weight: float) -> ScoreSnapshot:
        self.preferences.update_weight(category, weight)
        return self.recompute()

    def apply_preset(self, name: str) -> ScoreSnapshot:
        self.preferences.apply_preset(name)
        return self.recompute()

    def replace_category(
        self,
        category: HealthCategory,
        readings: Iterable[MetricReading],
    ) -> ScoreSnapshot:
        """Swap in a complete batch for one category."""
        self._readings[category] = self._own_readings(category, readings)
        return self.recompute()

    def replace_all(self, readings: Iterable[MetricReading]) -> ScoreSnapshot:
        """Swap in a complete batch covering every category."""
        grouped: dict[HealthCategory, list[MetricReading]] = defaultdict(list)
        for reading in readings:
            grouped[reading.category].append(reading)
        self._readings = dict(grouped)
        return self.recompute()

    def recompute(self) -> ScoreSnapshot:
        readings = [r for batch in self._readings.values() for r in batch]
        self._metrics = self._provider.normalize_all(readings)
        snapshot = self.calculator.compute(self._metrics, self.preferences)
        self._publish(snapshot)
        return snapshot

    # ── Acquisition barrier ──────────────────────────────────────────────────

    async def refresh(self, fetchers: Mapping[HealthCategory, Fetcher]) -> Optional[ScoreSnapshot]:
        """
        Run every category fetch concurrently, wait for all of them, then
        aggregate once. Only the fetched categories are replaced; the others
        keep their readings. A fetch that fails leaves its category empty. If a
        newer refresh started meanwhile, this result is dropped and the
        current snapshot is returned.
        """
        self._generation += 1
        generation = self._generation

        categories = list(fetchers)
        results = await asyncio.gather(
            *(fetchers[c]() for c in categories), return_exceptions=True
        )

        if generation != self._generation:
            log.debug(f"Refresh #{generation} superseded by #{self._generation}, result discarded.")
            return self.latest

        for category, result in zip(categories, results):
            if isinstance(result, BaseException):
                log.warning(f"Fetching {category.value} failed: {result!r}")
                self._readings[category] = []
                continue
            self._readings[category] = self._own_readings(category, result)

        return self.recompute()

    # ── Internals ────────────────────────────────────────────────────────────

    @staticmethod
    def _own_readings(
        category: HealthCategory,
        readings: Iterable[MetricReading],
    ) -> list[MetricReading]:
        batch = []
        for reading in readings:
            if reading.category != category:
                log.warning(
                    f"Reading '{reading.id}' belongs to {reading.category.value}, "
                    f"not {category.value}, reading skipped."
                )
                continue
            batch.append(reading)
        return batch

    def _publish(self, snapshot: ScoreSnapshot) -> None:
        self.latest = snapshot
        log.info(
            f"Body score {snapshot.body_score:.1f} "
            f"(confidence {snapshot.confidence_score:.1f}%, {snapshot.metric_count} metrics)"
        )
        for listener in self._listeners:
            listener(snapshot)
