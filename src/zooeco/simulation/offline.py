"""Offline rewards: one end-of-session reconciliation.

Key Concepts:
- Elapsed time since the player was last seen is clamped to [0, max_offline_hours]
- Growth and the income/upkeep ledger run together over the clamped interval
- The resulting balance is clamped to [0, coin_cap]
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ..engine.animals import AnimalInstance, Clock, Timestamp, elapsed_hours, to_datetime
from ..engine.bonuses import BonusResolver, EconomyBonusVector
from ..engine.demand import ElasticDemandModel
from ..engine.ledger import EconomyLedger, EvolutionEvent

logger = logging.getLogger(__name__)


@dataclass
class OfflineRewardsSummary:
    """Outcome of one offline reconciliation."""
    elapsed_hours: float  # clamped
    offline_hours: int
    offline_minutes: int
    total_visitors: int
    gross_income: int
    total_cost: int
    net_income: int
    evolved_animals: List[EvolutionEvent]
    total_xp_gained: int
    applied_bonuses: EconomyBonusVector
    updated_animals: List[AnimalInstance]
    final_coins: int
    ticket_price: float
    skipped_species: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            'elapsed_hours': self.elapsed_hours,
            'offline_hours': self.offline_hours,
            'offline_minutes': self.offline_minutes,
            'total_visitors': self.total_visitors,
            'gross_income': self.gross_income,
            'total_cost': self.total_cost,
            'net_income': self.net_income,
            'evolved_animals': [
                {'species': e.species, 'index': e.index, 'gender': e.gender, 'animal_id': e.animal_id}
                for e in self.evolved_animals
            ],
            'total_xp_gained': self.total_xp_gained,
            'applied_bonuses': self.applied_bonuses.to_dict(),
            'updated_animals': [a.to_dict() for a in self.updated_animals],
            'final_coins': self.final_coins,
            'ticket_price': self.ticket_price,
            'skipped_species': list(self.skipped_species),
        }


def clamp_hours(hours: float, max_hours: float) -> float:
    """Clamp elapsed hours to [0, max_hours]; NaN becomes 0."""
    if hours is None or math.isnan(hours):
        return 0.0
    return min(max(0.0, hours), max_hours)


class OfflineRewardsPipeline:
    """Growth + ledger + caps as one reconciliation."""

    def __init__(
        self,
        bonuses: BonusResolver,
        demand: ElasticDemandModel,
        ledger: EconomyLedger,
        clock: Clock,
        max_offline_hours: float = 4.0
    ):
        """
        Initialize pipeline.

        Args:
            bonuses: Item bonus resolver
            demand: Demand model, used to normalise the ticket price
            ledger: Income/upkeep ledger (runs growth)
            clock: Injected source of "now"
            max_offline_hours: Cap on credited hours
        """
        self.bonuses = bonuses
        self.demand = demand
        self.ledger = ledger
        self.clock = clock
        self.max_offline_hours = max_offline_hours

    def run(
        self,
        last_seen_at: Timestamp,
        animals: List[AnimalInstance],
        coins: float,
        owned_items: Optional[Iterable[str]] = None,
        ticket_price: Optional[float] = None
    ) -> OfflineRewardsSummary:
        """
        Reconcile the time since ``last_seen_at``.

        Args:
            last_seen_at: When the player was last seen
            animals: Current animal list (not mutated)
            coins: Current coin balance
            owned_items: Owned item identifiers
            ticket_price: Ticket price, None for the reference price

        Returns:
            OfflineRewardsSummary
        """
        now = to_datetime(self.clock())
        raw_hours = elapsed_hours(last_seen_at, now)
        hours = clamp_hours(raw_hours, self.max_offline_hours)

        bonuses = self.bonuses.resolve(owned_items)
        price = self.demand.normalize_price(ticket_price)

        ledger = self.ledger.accumulate(animals, hours, bonuses, price, now=now)
        net_income = ledger.net_income
        final_coins = self.ledger.settle(coins, net_income)

        logger.info(
            "Offline rewards: %.2fh (raw %.2fh), %d animals, net %+d coins, %d evolved, balance %d",
            hours, raw_hours if not math.isnan(raw_hours) else 0.0,
            len(animals), net_income, len(ledger.evolved), final_coins
        )

        return OfflineRewardsSummary(
            elapsed_hours=hours,
            offline_hours=int(math.floor(hours)),
            offline_minutes=int(math.floor((hours % 1) * 60)),
            total_visitors=ledger.total_visitors,
            gross_income=int(math.floor(ledger.gross_income)),
            total_cost=int(math.floor(ledger.total_cost)),
            net_income=net_income,
            evolved_animals=ledger.evolved,
            total_xp_gained=ledger.total_xp_gained,
            applied_bonuses=bonuses,
            updated_animals=ledger.updated_animals,
            final_coins=final_coins,
            ticket_price=price,
            skipped_species=ledger.skipped_species,
        )
