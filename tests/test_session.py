"""
BodyScore — Scoring Session Tests
Recompute triggers and the concurrent refresh barrier.
"""

import asyncio
import logging

import pytest

from bodyscore.models import BiologicalSex, HealthCategory, MetricReading, Profile


BC = HealthCategory.body_composition
FIT = HealthCategory.fitness
LIFE = HealthCategory.lifestyle

MALE_25 = Profile(age=25, biological_sex=BiologicalSex.male, height_m=1.8)


def _reading(metric_id: str, category: HealthCategory, value: float, secondary=None):
    return MetricReading(id=metric_id, category=category, value=value, secondary_value=secondary)


class TestScoringSession:

    def setup_method(self):
        from bodyscore.preferences import Preferences
        from bodyscore.session import ScoringSession
        self.session = ScoringSession(preferences=Preferences())
        self.published = []
        self.session.subscribe(self.published.append)

    def test_default_preferences_from_settings(self):
        from bodyscore.config import settings
        from bodyscore.preferences import PRESETS
        from bodyscore.session import ScoringSession
        session = ScoringSession()
        assert session.preferences.category_weights == PRESETS[settings.DEFAULT_PRESET]
        assert session.profile.has_demographics is False

    def test_replace_all_publishes(self):
        snap = self.session.replace_all([
            _reading("bmi", BC, 22.0),                 # 1.0
            _reading("step_count", FIT, 15000),        # 1.0
        ])
        assert snap.body_score == pytest.approx(100.0)
        assert self.published == [snap]
        assert self.session.latest is snap
        assert len(self.session.metrics) == 2

    def test_unscorable_readings_dropped(self):
        snap = self.session.replace_all([
            _reading("bmi", BC, 22.0),
            _reading("cholesterol", BC, 180.0),
            _reading("blood_pressure", HealthCategory.heart_and_vitals, 120.0),
        ])
        assert snap.metric_count == 1
        assert set(snap.category_scores) == {BC}

    def test_update_weight_recomputes(self):
        self.session.replace_all([_reading("bmi", BC, 22.0)])
        snap = self.session.update_weight(BC, 1.5)
        assert snap.category_scores[BC] == pytest.approx(150.0)
        assert snap.body_score == pytest.approx(100.0)
        assert snap.preferences_version == 1
        assert len(self.published) == 2

    def test_apply_preset_recomputes(self):
        self.session.replace_all([_reading("bmi", BC, 22.0), _reading("sleep", LIFE, 5.0)])
        snap = self.session.apply_preset("default")
        assert snap.category_scores[LIFE] == pytest.approx(0.4 * 100 * 0.5)

    def test_set_profile_renormalizes(self):
        before = self.session.replace_all([_reading("body_fat", BC, 8.0)])
        assert before.category_scores[BC] == pytest.approx(40.0)
        after = self.session.set_profile(MALE_25)
        assert after.category_scores[BC] == pytest.approx(100.0)
        assert self.session.profile is MALE_25

    def test_replace_category_keeps_others(self):
        self.session.replace_all([_reading("bmi", BC, 22.0), _reading("step_count", FIT, 2000)])
        snap = self.session.replace_category(FIT, [_reading("step_count", FIT, 15000)])
        assert snap.category_scores == {BC: pytest.approx(100.0), FIT: pytest.approx(100.0)}

    def test_replace_category_skips_foreign_readings(self):
        snap = self.session.replace_category(FIT, [
            _reading("step_count", FIT, 15000),
            _reading("bmi", BC, 22.0),
        ])
        assert set(snap.category_scores) == {FIT}

    def test_replace_category_with_empty_batch_clears_it(self):
        self.session.replace_all([_reading("bmi", BC, 22.0), _reading("step_count", FIT, 15000)])
        snap = self.session.replace_category(FIT, [])
        assert set(snap.category_scores) == {BC}


class TestRefresh:

    def setup_method(self):
        from bodyscore.preferences import Preferences
        from bodyscore.session import ScoringSession
        self.session = ScoringSession(preferences=Preferences())

    def test_refresh_aggregates_once(self):
        published = []
        self.session.subscribe(published.append)

        async def body():
            return [_reading("bmi", BC, 22.0)]

        async def fitness():
            await asyncio.sleep(0)
            return [_reading("step_count", FIT, 5000)]     # 0.6

        snap = asyncio.run(self.session.refresh({BC: body, FIT: fitness}))
        assert snap.body_score == pytest.approx(80.0)
        assert len(published) == 1

    def test_failed_fetch_leaves_category_empty(self):
        async def body():
            return [_reading("bmi", BC, 22.0)]

        async def broken():
            raise RuntimeError("source unavailable")

        snap = asyncio.run(self.session.refresh({BC: body, FIT: broken}))
        assert set(snap.category_scores) == {BC}
        assert snap.body_score == pytest.approx(100.0)

    def test_readings_filed_under_wrong_category_ignored(self):
        async def body():
            return [_reading("bmi", BC, 22.0), _reading("step_count", FIT, 15000)]

        snap = asyncio.run(self.session.refresh({BC: body}))
        assert set(snap.category_scores) == {BC}

    def test_stale_refresh_discarded(self):
        release = None

        async def slow():
            await release.wait()
            return [_reading("bmi", BC, 30.0)]

        async def fast():
            return [_reading("step_count", FIT, 15000)]

        async def scenario():
            nonlocal release
            release = asyncio.Event()
            first = asyncio.create_task(self.session.refresh({BC: slow}))
            await asyncio.sleep(0)
            second = await self.session.refresh({FIT: fast})
            release.set()
            stale = await first
            return second, stale

        second, stale = asyncio.run(scenario())
        assert set(second.category_scores) == {FIT}
        assert stale is second
        assert self.session.latest is second

    def test_partial_refresh_keeps_other_categories(self):
        self.session.replace_all([_reading("bmi", BC, 22.0), _reading("sleep", LIFE, 8.0)])

        async def fitness():
            return [_reading("step_count", FIT, 5000)]     # 0.6

        snap = asyncio.run(self.session.refresh({FIT: fitness}))
        assert set(snap.category_scores) == {BC, FIT, LIFE}
        assert snap.category_scores[FIT] == pytest.approx(60.0)

    def test_refresh_replaces_fetched_category(self):
        self.session.replace_all([_reading("bmi", BC, 22.0), _reading("step_count", FIT, 15000)])

        async def fitness():
            return [_reading("step_count", FIT, 5000)]

        snap = asyncio.run(self.session.refresh({FIT: fitness}))
        assert snap.metric_count == 2
        assert snap.category_scores[FIT] == pytest.approx(60.0)

    def test_refresh_warns_on_foreign_readings(self, caplog):
        async def body():
            return [_reading("bmi", BC, 22.0), _reading("step_count", FIT, 15000)]

        with caplog.at_level(logging.WARNING, logger="bodyscore.session"):
            asyncio.run(self.session.refresh({BC: body}))
        assert any("step_count" in r.getMessage() for r in caplog.records)
