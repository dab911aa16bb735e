"""Tests for the power-up effect engine."""

import pytest

from pipeline_defense.events import EventKind
from pipeline_defense.models.enums import HazardKind, MarkerKind, PowerUpKind
from pipeline_defense.sim.entities import Hazard, PowerUp
from pipeline_defense.sim.inputs import IDLE, TickInput
from pipeline_defense.sim.powerups import POWER_UP_EFFECTS, PowerUpEngine
from pipeline_defense.sim.simulation import snapshot, step
from pipeline_defense.tuning import TuningConfig


def add_hazard(session, x, y):
    return session.registry.add_hazard(
        Hazard(x=x, y=y, kind=HazardKind.COMMON, speed=1.0, damage=10))


def collect(session, kind):
    """Drop a power-up into the zap band and zap it."""
    session.registry.add_power_up(PowerUp(x=410, y=400, kind=kind, speed=1.0))
    return step(session, TickInput(trigger=True))


class TestEngineTable:
    """The kind -> effect table."""

    def test_every_kind_has_an_effect(self):
        assert set(POWER_UP_EFFECTS) == set(PowerUpKind)

    def test_incomplete_table_rejected(self):
        partial = {PowerUpKind.HEAL: POWER_UP_EFFECTS[PowerUpKind.HEAL]}
        with pytest.raises(ValueError):
            PowerUpEngine(TuningConfig(), effects=partial)

    def test_collect_awards_fixed_score(self, session):
        events = collect(session, PowerUpKind.HEAL)
        collect_events = [e for e in events if e.kind == EventKind.COLLECT]
        assert len(collect_events) == 1
        assert collect_events[0].entity_kind == 'heal'
        assert session.score == 250


class TestRangeBoost:
    """Battery: doubled zap half-width for a while."""

    def test_doubles_then_reverts_exactly_at_zero(self, session):
        collect(session, PowerUpKind.RANGE_BOOST)
        assert session.zap_range == 100

        engine = session.power_ups
        while engine.remaining(PowerUpKind.RANGE_BOOST) > 1:
            step(session, IDLE)
            assert session.zap_range == 100

        step(session, IDLE)

        assert session.zap_range == session.tuning.action.base_range
        assert not engine.is_active(PowerUpKind.RANGE_BOOST)

    def test_lasts_full_duration(self, session):
        collect(session, PowerUpKind.RANGE_BOOST)
        ticks = 1
        while session.power_ups.is_active(PowerUpKind.RANGE_BOOST):
            step(session, IDLE)
            ticks += 1
        assert ticks == session.tuning.effects.range_boost_ticks

    def test_recollect_resets_instead_of_stacking(self, session):
        engine = session.power_ups
        engine.apply(session, PowerUpKind.RANGE_BOOST, 0, 0)
        for _ in range(100):
            engine.tick(session)

        engine.apply(session, PowerUpKind.RANGE_BOOST, 0, 0)

        assert engine.remaining(PowerUpKind.RANGE_BOOST) == 600
        assert session.zap_range == 100

    def test_revert_runs_once(self, session):
        engine = session.power_ups
        engine.apply(session, PowerUpKind.RANGE_BOOST, 0, 0)
        expirations = []
        for _ in range(700):
            expirations.extend(engine.tick(session))
        assert expirations == [PowerUpKind.RANGE_BOOST]


class TestAvatarDuplicate:
    """Survey manager: a second technician."""

    def test_duplicate_appears_and_expires(self, session):
        collect(session, PowerUpKind.AVATAR_DUPLICATE)
        snap = snapshot(session)
        assert snap.duplicate_active is True
        assert [a.duplicate for a in snap.avatars] == [False, True]

        for _ in range(session.tuning.effects.duplicate_ticks):
            step(session, IDLE)

        assert session.duplicate_active is False
        assert len(snapshot(session).avatars) == 1


class TestAreaClear:
    """Bullhorn: radius blast around the collection point."""

    def test_clears_hazards_in_radius(self, session):
        near = add_hazard(session, 560, 400)
        far = add_hazard(session, 100, 100)

        events = session.power_ups.apply(session, PowerUpKind.AREA_CLEAR, 410, 400)

        assert near not in session.registry.hazards
        assert far in session.registry.hazards
        assert session.score == 250 + 5
        area = [e for e in events if e.kind == EventKind.AREA_CLEAR]
        assert area[0].value == 1
        assert any(m.kind == MarkerKind.BLAST for m in session.registry.markers)

    def test_no_lingering_duration(self, session):
        session.power_ups.apply(session, PowerUpKind.AREA_CLEAR, 410, 400)
        assert not session.power_ups.is_active(PowerUpKind.AREA_CLEAR)


class TestHeal:
    """CartoPac: instant repair."""

    def test_heals_ten(self, session):
        session.health.value = 50
        collect(session, PowerUpKind.HEAL)
        assert session.health.value == 60
        assert not session.power_ups.is_active(PowerUpKind.HEAL)

    def test_heal_capped(self, session):
        session.health.value = 95
        collect(session, PowerUpKind.HEAL)
        assert session.health.value == 100


class TestWaveClear:
    """AI bomb: full clear plus slowdown."""

    def test_clears_field_and_slows(self, session):
        for x in (100, 200, 700):
            add_hazard(session, x, 100)

        events = collect(session, PowerUpKind.WAVE_CLEAR)

        assert session.registry.hazards == []
        assert session.speed_multiplier == pytest.approx(0.1)
        area = [e for e in events if e.kind == EventKind.AREA_CLEAR]
        assert area[0].value == 3
        assert area[0].entity_kind == 'wave_clear'

    def test_slowdown_scales_level_clock(self, session):
        collect(session, PowerUpKind.WAVE_CLEAR)
        before = session.time_left
        step(session, IDLE, dt=1.0)
        assert before - session.time_left == pytest.approx(0.1)

    def test_slowdown_suspends_hazard_spawns(self, session):
        collect(session, PowerUpKind.WAVE_CLEAR)
        session.spawner.hazard_timer = 1
        step(session, IDLE)
        assert session.spawner.hazard_timer == 1
        assert session.registry.hazards == []

    def test_speed_restored(self, session):
        collect(session, PowerUpKind.WAVE_CLEAR)
        for _ in range(session.tuning.effects.slowdown_ticks):
            step(session, IDLE)
        assert session.speed_multiplier == 1.0
        assert snapshot(session).slowed is False
