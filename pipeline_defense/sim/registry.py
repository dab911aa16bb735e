"""
Entity registry - ordered, mutable entity collections.

Lists keep insertion order (draw order). Removal while iterating is only
safe when walking a collection in reverse index order, which is how the
resolver and the per-tick updates traverse them.
"""

from typing import Iterator, List, Tuple, TypeVar, Union

from pipeline_defense.sim.entities import EffectMarker, Hazard, PowerUp

Entity = Union[Hazard, PowerUp, EffectMarker]
E = TypeVar('E', Hazard, PowerUp, EffectMarker)


def iter_reversed(collection: List[E]) -> Iterator[Tuple[int, E]]:
    """Yield (index, entity) from last to first.

    The caller may `del collection[index]` for the yielded index without
    disturbing the entries still to be visited.
    """
    for i in range(len(collection) - 1, -1, -1):
        yield i, collection[i]


class EntityRegistry:
    """Hazards, power-ups and effect markers of one session."""

    def __init__(self):
        self.hazards: List[Hazard] = []
        self.power_ups: List[PowerUp] = []
        self.markers: List[EffectMarker] = []

    def _append(self, collection: List[E], entity: E) -> E:
        if any(existing is entity for existing in collection):
            raise ValueError(f"{entity} is already registered")
        collection.append(entity)
        return entity

    def add_hazard(self, hazard: Hazard) -> Hazard:
        return self._append(self.hazards, hazard)

    def add_power_up(self, power_up: PowerUp) -> PowerUp:
        return self._append(self.power_ups, power_up)

    def add_marker(self, marker: EffectMarker) -> EffectMarker:
        return self._append(self.markers, marker)

    def clear_hazards(self) -> int:
        """Remove every hazard. Returns how many were removed."""
        count = len(self.hazards)
        self.hazards.clear()
        return count

    def clear(self) -> None:
        """Drop every entity (session restart)."""
        self.hazards.clear()
        self.power_ups.clear()
        self.markers.clear()

    def update_markers(self) -> None:
        """Age markers and drop the expired ones."""
        for i, marker in iter_reversed(self.markers):
            if not marker.update():
                del self.markers[i]

    def __len__(self) -> int:
        return len(self.hazards) + len(self.power_ups) + len(self.markers)

    def __repr__(self) -> str:
        return (f"EntityRegistry(hazards={len(self.hazards)}, "
                f"power_ups={len(self.power_ups)}, markers={len(self.markers)})")
