"""Steady-state hourly economy view for the current instant.

Nothing here mutates animals or reads the clock: identical inputs always give
identical snapshots.
"""

import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..config.catalog import SpeciesCatalog, unique_items
from ..engine.animals import AnimalInstance
from ..engine.appeal import AttractivenessModel, SatisfactionModel
from ..engine.bonuses import BonusResolver
from ..engine.demand import ElasticDemandModel
from ..engine.growth import GrowthEngine
from ..engine.ledger import EconomyLedger

logger = logging.getLogger(__name__)


@dataclass
class NextEvolution:
    """The baby closest to evolving."""
    species: str
    current_xp: int
    remaining_xp: int
    hours_until_evolution: Optional[float]  # None when the baby cannot grow
    animal_id: Optional[Any] = None


@dataclass
class EconomyStatusSnapshot:
    """Hourly rates and derived scores of a zoo."""
    hourly_income: int  # entrance + kiosk
    hourly_maintenance_cost: int
    hourly_visitors: int
    hourly_net: int
    kiosk_revenue: int
    attractiveness: int
    satisfaction: float
    has_kiosk: bool
    is_in_deficit: bool
    hourly_deficit: int
    total_animals: int
    baby_animals: int
    adult_animals: int
    next_evolution: Optional[NextEvolution]
    ticket_price: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        nxt = self.next_evolution
        return {
            'hourly_income': self.hourly_income,
            'hourly_maintenance_cost': self.hourly_maintenance_cost,
            'hourly_visitors': self.hourly_visitors,
            'hourly_net': self.hourly_net,
            'kiosk_revenue': self.kiosk_revenue,
            'attractiveness': self.attractiveness,
            'satisfaction': self.satisfaction,
            'has_kiosk': self.has_kiosk,
            'is_in_deficit': self.is_in_deficit,
            'hourly_deficit': self.hourly_deficit,
            'total_animals': self.total_animals,
            'baby_animals': self.baby_animals,
            'adult_animals': self.adult_animals,
            'next_evolution': None if nxt is None else {
                'species': nxt.species,
                'current_xp': nxt.current_xp,
                'remaining_xp': nxt.remaining_xp,
                'hours_until_evolution': nxt.hours_until_evolution,
                'animal_id': nxt.animal_id,
            },
            'ticket_price': self.ticket_price,
        }


class EconomyStatusModel:
    """Combine attractiveness, satisfaction and demand into an hourly view."""

    def __init__(
        self,
        species: SpeciesCatalog,
        bonuses: BonusResolver,
        demand: ElasticDemandModel,
        attractiveness: AttractivenessModel,
        satisfaction: SatisfactionModel,
        ledger: EconomyLedger,
        growth: GrowthEngine,
        base_daily_visitors: float = 50,
        kiosk_item_id: str = "kiosk",
        kiosk_revenue_per_visitor: float = 0.3
    ):
        self.species = species
        self.bonuses = bonuses
        self.demand = demand
        self.attractiveness = attractiveness
        self.satisfaction = satisfaction
        self.ledger = ledger
        self.growth = growth
        self.base_daily_visitors = base_daily_visitors
        self.kiosk_item_id = kiosk_item_id
        self.kiosk_revenue_per_visitor = kiosk_revenue_per_visitor

    def snapshot(
        self,
        animals: List[AnimalInstance],
        owned_items: Optional[Iterable[str]] = None,
        ticket_price: Optional[float] = None
    ) -> EconomyStatusSnapshot:
        """
        Compute the hourly economy view.

        Args:
            animals: Current animal list
            owned_items: Owned item identifiers
            ticket_price: Ticket price, None for the reference price

        Returns:
            EconomyStatusSnapshot
        """
        owned = unique_items(owned_items)
        bonuses = self.bonuses.resolve(owned)
        price = self.demand.normalize_price(ticket_price)

        has_kiosk = self.kiosk_item_id in owned
        total_animals = len(animals)
        attractiveness = self.attractiveness.score(total_animals, owned)
        satisfaction = self.satisfaction.score(total_animals, owned, has_kiosk)

        maintenance = 0.0
        babies = 0
        adults = 0
        closest: Optional[AnimalInstance] = None
        for animal in animals:
            if animal.species not in self.species:
                logger.warning("No economy data for species %r, skipping", animal.species)
                continue

            if animal.is_baby:
                babies += 1
                if closest is None or animal.experience > closest.experience:
                    closest = animal
            else:
                adults += 1

            maintenance += self.ledger.hourly_cost(animal, total_animals)

        base_visitors = self.base_daily_visitors / 24
        attraction_visitors = self.attractiveness.visitors_per_hour(attractiveness)
        pre_boost = (base_visitors + attraction_visitors) * self.satisfaction.visitor_multiplier(satisfaction)
        boosted = pre_boost * (1 + bonuses.visitor_boost)
        visitors = self.demand.adjusted_visitors(boosted, price)

        maintenance_cost = int(math.floor(maintenance * (1 - bonuses.cost_reduction)))
        entrance_income = visitors * price * bonuses.income_factor
        kiosk_revenue = visitors * self.kiosk_revenue_per_visitor if has_kiosk else 0.0

        gross = entrance_income + kiosk_revenue
        hourly_net = int(math.floor(gross - maintenance_cost))
        is_in_deficit = hourly_net < 0

        next_evolution = None
        if closest is not None:
            current_xp = max(0, closest.experience)
            next_evolution = NextEvolution(
                species=closest.species,
                current_xp=current_xp,
                remaining_xp=max(0, self.growth.evolution_threshold - current_xp),
                hours_until_evolution=self.growth.estimate_hours_to_evolve(closest, bonuses.xp_bonus),
                animal_id=closest.animal_id,
            )

        return EconomyStatusSnapshot(
            hourly_income=int(math.floor(gross)),
            hourly_maintenance_cost=maintenance_cost,
            hourly_visitors=visitors,
            hourly_net=hourly_net,
            kiosk_revenue=int(math.floor(kiosk_revenue)),
            attractiveness=attractiveness,
            satisfaction=satisfaction,
            has_kiosk=has_kiosk,
            is_in_deficit=is_in_deficit,
            hourly_deficit=-hourly_net if is_in_deficit else 0,
            total_animals=total_animals,
            baby_animals=babies,
            adult_animals=adults,
            next_evolution=next_evolution,
            ticket_price=price,
        )
