"""Passive breeding of adult pairs on a fixed cadence.

Key Concepts:
- A check only proceeds once interval_hours have passed since the previous one
- Per species, pairs = min(adult females, adult males); each pair yields one baby
- A check yields one generation, however many intervals have passed
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List

from ..config.catalog import SpeciesCatalog
from .animals import AnimalInstance

logger = logging.getLogger(__name__)


@dataclass
class BreedingPair:
    """Breeding outcome for one species."""
    species: str
    females: int
    males: int
    babies: int


@dataclass
class BreedingResult:
    """New babies and the per-species pairs that produced them."""
    new_babies: List[AnimalInstance] = field(default_factory=list)
    breeding_pairs: List[BreedingPair] = field(default_factory=list)
    gate_open: bool = False
    hours_since_last_check: float = 0.0


class BreedingSimulator:
    """Pair adults by species and gender to produce offspring."""

    def __init__(self, species: SpeciesCatalog, interval_hours: float = 24.0):
        """
        Initialize breeding simulator.

        Args:
            species: Species catalog; unknown species do not breed
            interval_hours: Minimum hours between two breeding checks
        """
        self.species = species
        self.interval_hours = interval_hours

    def gate_open(self, hours_since_last_check: float) -> bool:
        """Whether enough time has passed; NaN or negative elapsed keeps it closed."""
        if hours_since_last_check is None or math.isnan(hours_since_last_check):
            return False
        return hours_since_last_check >= self.interval_hours

    def breed(
        self,
        animals: List[AnimalInstance],
        hours_since_last_check: float,
        now: datetime
    ) -> BreedingResult:
        """
        Run one breeding check.

        Args:
            animals: Current animal list
            hours_since_last_check: Hours since the previous check
            now: Birth timestamp for new babies

        Returns:
            BreedingResult, empty when the gate is closed
        """
        result = BreedingResult(hours_since_last_check=hours_since_last_check)
        if not self.gate_open(hours_since_last_check):
            return result
        result.gate_open = True

        # species -> [females, males], in first-seen order
        adults: Dict[str, List[int]] = {}
        for animal in animals:
            if animal.species not in self.species:
                logger.warning("No economy data for species %r, not breeding it", animal.species)
                continue
            counts = adults.setdefault(animal.species, [0, 0])
            if not animal.is_adult:
                continue
            if animal.gender == "female":
                counts[0] += 1
            elif animal.gender == "male":
                counts[1] += 1

        for species, (females, males) in adults.items():
            pairs = min(females, males)
            if pairs <= 0:
                continue
            result.new_babies.extend(AnimalInstance.newborn(species, now) for _ in range(pairs))
            result.breeding_pairs.append(BreedingPair(
                species=species,
                females=females,
                males=males,
                babies=pairs
            ))

        if result.new_babies:
            logger.info(
                "Breeding produced %d babies across %d species",
                len(result.new_babies), len(result.breeding_pairs)
            )
        return result
