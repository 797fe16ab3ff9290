"""Zoo attractiveness and visitor satisfaction scores."""

from typing import Iterable, Optional

from ..config.catalog import ItemCatalog


class AttractivenessModel:
    """Score a zoo's appeal from its animal count and owned item categories.

    Formula: animals * per_animal + habitats * per_habitat
             + decorations * per_decoration + toys * per_toy
    """

    def __init__(
        self,
        items: ItemCatalog,
        per_animal: int = 2,
        per_habitat: int = 10,
        per_decoration: int = 3,
        per_toy: int = 5,
        visitors_per_point: float = 0.5
    ):
        self.items = items
        self.per_animal = per_animal
        self.per_habitat = per_habitat
        self.per_decoration = per_decoration
        self.per_toy = per_toy
        self.visitors_per_point = visitors_per_point

    def score(self, animal_count: int, owned_items: Optional[Iterable[str]]) -> int:
        """
        Compute the attractiveness score.

        Args:
            animal_count: Number of animals in the zoo
            owned_items: Owned item identifiers

        Returns:
            Open-ended integer score
        """
        counts = self.items.count_by_category(owned_items)
        return int(
            max(0, animal_count) * self.per_animal +
            counts['habitat'] * self.per_habitat +
            counts['decoration'] * self.per_decoration +
            counts['toy'] * self.per_toy
        )

    def visitors_per_hour(self, score: int) -> float:
        """Hourly visitors attracted by a given score."""
        return score * self.visitors_per_point


class SatisfactionModel:
    """Score visitor happiness on a 0-100 scale."""

    def __init__(
        self,
        items: ItemCatalog,
        base: float = 50,
        per_animal: float = 2,
        animal_cap: float = 30,
        per_food_item: float = 2,
        kiosk_boost: float = 20,
        visitor_multiplier_per_point: float = 0.01
    ):
        self.items = items
        self.base = base
        self.per_animal = per_animal
        self.animal_cap = animal_cap
        self.per_food_item = per_food_item
        self.kiosk_boost = kiosk_boost
        self.visitor_multiplier_per_point = visitor_multiplier_per_point

    def score(
        self,
        animal_count: int,
        owned_items: Optional[Iterable[str]],
        has_kiosk: bool = False
    ) -> float:
        """
        Compute visitor satisfaction.

        Formula: clamp(base + min(animals * per_animal, animal_cap)
                       + food_items * per_food_item + kiosk_boost?, 0, 100)
        """
        food_items = self.items.count_by_category(owned_items)['food']
        satisfaction = (
            self.base +
            min(max(0, animal_count) * self.per_animal, self.animal_cap) +
            food_items * self.per_food_item +
            (self.kiosk_boost if has_kiosk else 0)
        )
        return min(max(satisfaction, 0), 100)

    def visitor_multiplier(self, satisfaction: float) -> float:
        """Visitor multiplier: 1% satisfaction = +1% visitors at the default weight."""
        return 1 + satisfaction * self.visitor_multiplier_per_point
