"""Per-species headcounts and breeding eligibility."""

import logging
from dataclasses import dataclass
from typing import Dict, List

from .animals import AnimalInstance

logger = logging.getLogger(__name__)


@dataclass
class SpeciesBreedingStats:
    """Headcount of one species."""
    species: str
    babies: int = 0
    females: int = 0
    males: int = 0

    @property
    def can_breed(self) -> bool:
        """At least one adult female and one adult male."""
        return self.females > 0 and self.males > 0

    def to_dict(self) -> dict:
        return {
            'species': self.species,
            'babies': self.babies,
            'females': self.females,
            'males': self.males,
            'can_breed': self.can_breed,
        }


class StatsAggregator:
    """Count animals per species by age stage and gender."""

    def aggregate(self, animals: List[AnimalInstance]) -> List[SpeciesBreedingStats]:
        """
        Single pass over the animal list.

        Counting is strictly by age stage: a gender found on a baby record is
        ignored, and an adult without gender counts as neither female nor male.

        Args:
            animals: Animal list

        Returns:
            Stats per species, in first-seen order
        """
        stats: Dict[str, SpeciesBreedingStats] = {}
        for animal in animals:
            entry = stats.get(animal.species)
            if entry is None:
                entry = stats[animal.species] = SpeciesBreedingStats(species=animal.species)

            if animal.is_baby:
                entry.babies += 1
            elif animal.gender == "female":
                entry.females += 1
            elif animal.gender == "male":
                entry.males += 1
            else:
                logger.debug("Adult %s without gender, not counted by gender", animal.species)

        return list(stats.values())
