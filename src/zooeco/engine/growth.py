"""Baby growth and evolution.

Key Concepts:
- Babies gain floor(hours * xp_per_hour * (1 + xp_bonus)) experience
- Experience is capped at the evolution threshold; reaching it evolves the baby
- Evolution assigns a gender by an unweighted coin flip, only if none is set
- Adults are never touched
"""

import math
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from .animals import AnimalInstance, RandomSource


@dataclass
class GrowthOutcome:
    """Result of advancing one animal."""
    animal: AnimalInstance
    gained: int = 0  # raw experience gained, before the threshold cap
    evolved: bool = False


class GrowthEngine:
    """Advance baby experience over elapsed time and decide evolution."""

    def __init__(
        self,
        rng: RandomSource,
        xp_per_hour: float = 10.0,
        evolution_threshold: int = 1000
    ):
        """
        Initialize growth engine.

        Args:
            rng: Random source used for the gender coin flip
            xp_per_hour: Base experience per hour for babies
            evolution_threshold: Experience at which a baby becomes an adult
        """
        self.rng = rng
        self.xp_per_hour = xp_per_hour
        self.evolution_threshold = evolution_threshold

    def experience_gain(self, hours: float, xp_bonus: float = 0.0) -> int:
        """Experience gained over ``hours``, never negative."""
        if not hours or hours <= 0 or math.isnan(hours):
            return 0
        gained = math.floor(hours * self.xp_per_hour * (1 + xp_bonus))
        return max(0, int(gained))

    def draw_gender(self) -> str:
        return "female" if self.rng.random() < 0.5 else "male"

    def advance(
        self,
        animal: AnimalInstance,
        hours: float,
        xp_bonus: float = 0.0,
        now: Optional[datetime] = None
    ) -> GrowthOutcome:
        """
        Advance one animal by ``hours``.

        The input animal is not mutated; a new instance is returned.

        Args:
            animal: Animal to advance
            hours: Elapsed hours (already clamped by the caller)
            xp_bonus: Fractional experience bonus
            now: Timestamp recorded as the last growth update

        Returns:
            GrowthOutcome with the updated animal and raw experience gained
        """
        if not animal.is_baby:
            return GrowthOutcome(animal=animal)

        gained = self.experience_gain(hours, xp_bonus)
        experience = min(max(0, animal.experience) + gained, self.evolution_threshold)

        updates = {'experience': experience}
        if now is not None:
            updates['last_growth_update_at'] = now

        evolved = experience >= self.evolution_threshold
        if evolved:
            updates['age_stage'] = "adult"
            if not animal.gender:
                updates['gender'] = self.draw_gender()

        return GrowthOutcome(animal=replace(animal, **updates), gained=gained, evolved=evolved)

    def estimate_hours_to_evolve(self, animal: AnimalInstance, xp_bonus: float = 0.0) -> Optional[float]:
        """
        Estimate hours until a baby evolves, rounded up to a tenth of an hour.

        Returns:
            Hours remaining, 0.0 for adults, None if the baby never grows
        """
        if not animal.is_baby:
            return 0.0
        remaining = max(0, self.evolution_threshold - max(0, animal.experience))
        rate = self.xp_per_hour * (1 + xp_bonus)
        if rate <= 0:
            return None
        return math.ceil(remaining / rate * 10) / 10
