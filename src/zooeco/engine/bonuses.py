"""Shop item bonuses aggregated into one vector per call."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from ..config.catalog import ItemCatalog, unique_items

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EconomyBonusVector:
    """Summed item bonuses, each a signed fraction (0 = no effect)."""
    visitor_boost: float = 0.0
    cost_reduction: float = 0.0
    income_multiplier: float = 0.0
    xp_bonus: float = 0.0

    @property
    def income_factor(self) -> float:
        """Factor applied to entrance income."""
        return 1.0 + self.income_multiplier

    def to_dict(self) -> dict:
        return {
            'visitor_boost': self.visitor_boost,
            'cost_reduction': self.cost_reduction,
            'income_multiplier': self.income_multiplier,
            'xp_bonus': self.xp_bonus,
        }


class BonusResolver:
    """Resolve owned item identifiers into an EconomyBonusVector."""

    def __init__(self, items: ItemCatalog, max_cost_reduction: float = 0.9):
        """
        Initialize bonus resolver.

        Args:
            items: Tagged item catalog carrying each item's effects
            max_cost_reduction: Cap on the summed cost reduction
        """
        self.items = items
        self.max_cost_reduction = max_cost_reduction

    def resolve(self, owned_items: Optional[Iterable[str]]) -> EconomyBonusVector:
        """
        Sum the effects of every owned item.

        Duplicate identifiers count once; unknown identifiers contribute nothing.

        Args:
            owned_items: Owned item identifiers

        Returns:
            Bonus vector
        """
        totals = {
            'visitor_boost': 0.0,
            'cost_reduction': 0.0,
            'income_multiplier': 0.0,
            'xp_bonus': 0.0,
        }
        for item_id in unique_items(owned_items):
            item = self.items.get(item_id)
            if item is None:
                logger.debug("Ignoring unknown item %r", item_id)
                continue
            for effect in item.effects:
                totals[effect.type] += effect.value

        totals['cost_reduction'] = min(totals['cost_reduction'], self.max_cost_reduction)
        return EconomyBonusVector(**totals)
