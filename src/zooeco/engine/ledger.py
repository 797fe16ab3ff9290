"""Per-animal income and upkeep over an offline interval.

Key Concepts:
- Every known animal draws visitors for the whole interval at its pre-call age stage,
  even if it evolves during the interval (the interval is not split)
- Visitors are boosted by items, then adjusted for the ticket price
- Upkeep is tiered baby < adult female < adult male and grows with zoo size
- Coin balance is clamped to [0, coin_cap] when settled
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..config.catalog import SpeciesCatalog
from .animals import AnimalInstance
from .bonuses import EconomyBonusVector
from .demand import ElasticDemandModel
from .growth import GrowthEngine

logger = logging.getLogger(__name__)


@dataclass
class EvolutionEvent:
    """An animal that became an adult during the interval."""
    species: str
    index: int  # position in the animal list
    gender: Optional[str] = None
    animal_id: Optional[object] = None


@dataclass
class LedgerResult:
    """Aggregated ledger totals."""
    hours: float
    updated_animals: List[AnimalInstance]
    evolved: List[EvolutionEvent] = field(default_factory=list)
    skipped_species: List[str] = field(default_factory=list)
    total_visitors: int = 0
    gross_income: float = 0.0
    total_cost: float = 0.0
    total_xp_gained: int = 0

    @property
    def net_income(self) -> int:
        """Net income, floored to whole coins."""
        return int(math.floor(self.gross_income - self.total_cost))


class EconomyLedger:
    """Offline income/cost accumulation with growth applied along the way."""

    def __init__(
        self,
        species: SpeciesCatalog,
        demand: ElasticDemandModel,
        growth: GrowthEngine,
        baby_cost: float = 0.1,
        female_cost: float = 0.15,
        male_cost: float = 0.2,
        per_animal_cost_growth: float = 0.01,
        coin_cap: int = 5000
    ):
        """
        Initialize ledger.

        Args:
            species: Species economy catalog
            demand: Elastic demand model
            growth: Growth engine applied to every baby
            baby_cost: Base upkeep per hour of a baby
            female_cost: Base upkeep per hour of an adult female
            male_cost: Base upkeep per hour of an adult male
            per_animal_cost_growth: Upkeep growth per animal in the zoo
            coin_cap: Maximum coin balance
        """
        self.species = species
        self.demand = demand
        self.growth = growth
        self.baby_cost = baby_cost
        self.female_cost = female_cost
        self.male_cost = male_cost
        self.per_animal_cost_growth = per_animal_cost_growth
        self.coin_cap = coin_cap

    def maintenance_rate(self, age_stage: str, gender: Optional[str]) -> float:
        """Base upkeep per hour; an adult without gender is billed as a female."""
        if age_stage != "adult":
            return self.baby_cost
        return self.male_cost if gender == "male" else self.female_cost

    def hourly_cost(self, animal: AnimalInstance, total_animals: int) -> float:
        """Upkeep per hour of one animal before item cost reductions."""
        size_multiplier = 1 + total_animals * self.per_animal_cost_growth
        return self.maintenance_rate(animal.age_stage, animal.gender) * size_multiplier

    def accumulate(
        self,
        animals: List[AnimalInstance],
        hours: float,
        bonuses: EconomyBonusVector,
        ticket_price: float,
        now: Optional[datetime] = None
    ) -> LedgerResult:
        """
        Accumulate income and upkeep for every animal over ``hours``.

        Args:
            animals: Current animal list
            hours: Clamped elapsed hours
            bonuses: Item bonus vector
            ticket_price: Normalised ticket price
            now: Instant stamped on grown animals

        Returns:
            LedgerResult with updated animals and totals
        """
        result = LedgerResult(hours=hours, updated_animals=[])
        total_animals = len(animals)

        for index, animal in enumerate(animals):
            profile = self.species.get(animal.species)
            if profile is None:
                logger.warning("No economy data for species %r, skipping", animal.species)
                result.skipped_species.append(animal.species)
                result.updated_animals.append(animal)
                continue

            # Billing uses the stage the animal had when the call started
            billed_stage = animal.age_stage
            billed_gender = animal.gender

            outcome = self.growth.advance(animal, hours, bonuses.xp_bonus, now=now)
            result.total_xp_gained += outcome.gained
            if outcome.evolved:
                result.evolved.append(EvolutionEvent(
                    species=animal.species,
                    index=index,
                    gender=outcome.animal.gender,
                    animal_id=animal.animal_id
                ))

            base_visitors = profile.visitors_per_hour(billed_stage) * hours
            boosted_visitors = base_visitors * (1 + bonuses.visitor_boost)
            adjusted_visitors = self.demand.adjusted_visitors(boosted_visitors, ticket_price)
            income = adjusted_visitors * ticket_price * bonuses.income_factor

            size_multiplier = 1 + total_animals * self.per_animal_cost_growth
            cost = (
                self.maintenance_rate(billed_stage, billed_gender) *
                size_multiplier *
                hours *
                (1 - bonuses.cost_reduction)
            )

            result.total_visitors += int(math.floor(boosted_visitors))
            result.gross_income += income
            result.total_cost += cost
            result.updated_animals.append(outcome.animal)

        return result

    def settle(self, coins: float, net_income: int) -> int:
        """Apply net income to a balance and clamp to [0, coin_cap]."""
        try:
            coins = float(coins)
        except (TypeError, ValueError):
            coins = 0.0
        if math.isnan(coins):
            coins = 0.0
        if math.isinf(coins):
            return self.coin_cap if coins > 0 else 0
        balance = math.floor(coins) + net_income
        return int(min(max(0, balance), self.coin_cap))
