"""Tests for entities and the entity registry."""

import pytest

from pipeline_defense.models.enums import HazardKind, MarkerKind, PowerUpKind
from pipeline_defense.sim.entities import EffectMarker, Hazard, PowerUp
from pipeline_defense.sim.registry import EntityRegistry, iter_reversed


def _hazard(x=100.0, y=0.0, **kwargs):
    return Hazard(x=x, y=y, kind=HazardKind.COMMON, speed=2.0, damage=10, **kwargs)


class TestEntities:
    """Tests for per-tick entity updates."""

    def test_hazard_falls(self):
        hazard = _hazard()
        hazard.update()
        assert hazard.y == 2.0
        assert hazard.x == 100.0

    def test_rare_hazard_wiggles_around_origin(self):
        """Wiggling hazards oscillate around their spawn column."""
        hazard = _hazard(wiggle_amplitude=8.0, wiggle_step=0.1)
        xs = []
        for _ in range(100):
            hazard.update()
            xs.append(hazard.x)
        assert max(xs) <= 108.0
        assert min(xs) >= 92.0
        assert max(xs) > 100.0 > min(xs)

    def test_entities_get_unique_ids(self):
        assert _hazard().id != _hazard().id

    def test_power_up_ages_and_leaves(self):
        """Power-ups count their age and leave past the bottom margin."""
        power_up = PowerUp(x=10, y=642, kind=PowerUpKind.HEAL, speed=5, despawn_margin=50)
        power_up.update()
        assert power_up.age == 1
        assert not power_up.has_left(600)
        power_up.update()
        assert power_up.has_left(600)

    def test_marker_expires(self):
        marker = EffectMarker(kind=MarkerKind.ZAP, x=0, y=0, ttl=2)
        assert marker.update() is True
        assert marker.update() is False


class TestEntityRegistry:
    """Tests for EntityRegistry."""

    def test_add_and_count(self):
        registry = EntityRegistry()
        registry.add_hazard(_hazard())
        registry.add_power_up(PowerUp(x=0, y=0, kind=PowerUpKind.HEAL, speed=1))
        registry.add_marker(EffectMarker(kind=MarkerKind.HIT, x=0, y=0, ttl=5))
        assert len(registry) == 3

    def test_duplicate_insert_rejected(self):
        """The same entity can never be registered twice."""
        registry = EntityRegistry()
        hazard = registry.add_hazard(_hazard())
        with pytest.raises(ValueError):
            registry.add_hazard(hazard)
        assert len(registry.hazards) == 1

    def test_equal_looking_entities_are_distinct(self):
        """Identity, not field equality, decides duplicates."""
        registry = EntityRegistry()
        registry.add_hazard(_hazard())
        registry.add_hazard(_hazard())
        assert len(registry.hazards) == 2

    def test_clear_hazards_returns_count(self):
        registry = EntityRegistry()
        for _ in range(3):
            registry.add_hazard(_hazard())
        assert registry.clear_hazards() == 3
        assert registry.hazards == []

    def test_update_markers_drops_expired(self):
        registry = EntityRegistry()
        short = registry.add_marker(EffectMarker(kind=MarkerKind.HIT, x=0, y=0, ttl=1))
        long = registry.add_marker(EffectMarker(kind=MarkerKind.HIT, x=0, y=0, ttl=3))
        registry.update_markers()
        assert short not in registry.markers
        assert long in registry.markers


class TestIterReversed:
    """Tests for removal-safe reverse iteration."""

    def test_delete_while_iterating(self):
        """Deleting the yielded index never skips or repeats an entry."""
        items = [_hazard(x=float(i)) for i in range(6)]
        seen = []
        for i, hazard in iter_reversed(items):
            seen.append(hazard.x)
            if int(hazard.x) % 2 == 0:
                del items[i]
        assert seen == [5.0, 4.0, 3.0, 2.0, 1.0, 0.0]
        assert [h.x for h in items] == [1.0, 3.0, 5.0]
