"""
Structure health model - the pipeline's hit points.

Health only changes through damage() and heal(), both clamped to
[0, MAX_HEALTH]. Reaching zero explodes the pipeline exactly once;
explosion is terminal until the session restarts.
"""

from dataclasses import dataclass

from pipeline_defense.logging import get_logger

log = get_logger('health')

MAX_HEALTH = 100.0


@dataclass
class StructureHealth:
    """
    Pipeline health state.

    Attributes:
        value: Current health in [0, MAX_HEALTH]
        exploded: True once health has reached zero
        hits_taken: Damage events absorbed (presentation draws cracks from it)
    """
    value: float = MAX_HEALTH
    exploded: bool = False
    hits_taken: int = 0

    def damage(self, amount: float) -> bool:
        """
        Apply damage.

        Args:
            amount: Non-negative damage

        Returns:
            True if this call exploded the pipeline
        """
        if amount < 0:
            raise ValueError(f"Damage must be non-negative, got {amount}")
        if self.exploded:
            return False

        self.value = max(0.0, self.value - amount)
        self.hits_taken += 1

        if self.value == 0.0:
            self.exploded = True
            log.info("Pipeline exploded after %d hits", self.hits_taken)
            return True
        return False

    def heal(self, amount: float) -> float:
        """
        Restore health, capped at MAX_HEALTH.

        Returns:
            Health actually restored
        """
        if amount < 0:
            raise ValueError(f"Heal amount must be non-negative, got {amount}")
        before = self.value
        self.value = min(MAX_HEALTH, self.value + amount)
        return self.value - before

    @property
    def fraction(self) -> float:
        """Health as a fraction of the maximum."""
        return self.value / MAX_HEALTH

    def reset(self) -> None:
        self.value = MAX_HEALTH
        self.exploded = False
        self.hits_taken = 0
