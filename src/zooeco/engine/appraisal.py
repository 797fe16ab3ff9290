"""Liquidation price of a single animal."""

import logging
import math
from typing import Optional

from ..config.catalog import SpeciesCatalog
from .animals import AnimalInstance

logger = logging.getLogger(__name__)


class SellPriceAppraiser:
    """Price an animal at a share of ~10 hours of adult visitor value.

    Babies fetch 50%, adult females 80%, adult males 100%.
    """

    def __init__(
        self,
        species: SpeciesCatalog,
        hour_multiplier: float = 10,
        baby_factor: float = 0.5,
        female_factor: float = 0.8,
        male_factor: float = 1.0
    ):
        self.species = species
        self.hour_multiplier = hour_multiplier
        self.baby_factor = baby_factor
        self.female_factor = female_factor
        self.male_factor = male_factor

    def appraise(self, animal: AnimalInstance, species: Optional[str] = None) -> int:
        """
        Compute the sell price.

        Args:
            animal: Animal to price
            species: Species to look up (defaults to the animal's own)

        Returns:
            Whole coins, 0 for unknown species
        """
        species = species or animal.species
        profile = self.species.get(species)
        if profile is None:
            logger.warning("No economy data for species %r, sell price is 0", species)
            return 0

        base_value = profile.visitors_per_hour("adult") * self.hour_multiplier
        if animal.is_baby:
            factor = self.baby_factor
        elif animal.gender == "female":
            factor = self.female_factor
        else:
            factor = self.male_factor
        return int(math.floor(base_value * factor))
