"""Read-only species and shop item catalogs.

Species profiles give the visitors an animal draws per hour at each age stage.
Shop items are tagged with their category as data, so attractiveness and
satisfaction never depend on matching identifier strings.
"""

from collections import Counter
from typing import Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, Field

AgeStage = Literal["baby", "adult"]
Rarity = Literal["common", "uncommon", "rare", "epic", "legendary"]
ItemCategory = Literal["habitat", "decoration", "toy", "food", "other"]
EffectType = Literal["visitor_boost", "cost_reduction", "income_multiplier", "xp_bonus"]

ITEM_CATEGORIES = ("habitat", "decoration", "toy", "food", "other")


class VisitorValue(BaseModel):
    """Visitors per hour by age stage."""
    baby: float = Field(ge=0)
    adult: float = Field(ge=0)


class SpeciesEconomyProfile(BaseModel):
    """Economic profile of one species."""
    species: str
    visitor_value: VisitorValue
    rarity: Rarity = "common"

    def visitors_per_hour(self, age_stage: AgeStage) -> float:
        """Visitor value per hour for the given age stage."""
        if age_stage == "adult":
            return self.visitor_value.adult
        return self.visitor_value.baby


class ItemEffect(BaseModel):
    """One bonus granted by owning an item."""
    type: EffectType
    value: float


class ItemDefinition(BaseModel):
    """Shop item tagged with its category."""
    item_id: str
    category: ItemCategory = "other"
    effects: List[ItemEffect] = Field(default_factory=list)


class SpeciesCatalog:
    """Lookup of species economy profiles."""

    def __init__(self, profiles: Iterable[SpeciesEconomyProfile]):
        self._profiles: Dict[str, SpeciesEconomyProfile] = {p.species: p for p in profiles}

    @classmethod
    def from_dict(cls, data: Dict[str, dict]) -> 'SpeciesCatalog':
        """Build from a ``{species: {visitor_value: ..., rarity: ...}}`` mapping."""
        return cls(
            SpeciesEconomyProfile(species=name, **entry)
            for name, entry in (data or {}).items()
        )

    def get(self, species: str) -> Optional[SpeciesEconomyProfile]:
        return self._profiles.get(species)

    def __contains__(self, species: str) -> bool:
        return species in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def species(self) -> List[str]:
        return list(self._profiles)


class ItemCatalog:
    """Lookup of shop items by identifier."""

    def __init__(self, items: Iterable[ItemDefinition]):
        self._items: Dict[str, ItemDefinition] = {item.item_id: item for item in items}

    @classmethod
    def from_dict(cls, data: Dict[str, dict]) -> 'ItemCatalog':
        """Build from a ``{item_id: {category: ..., effects: [...]}}`` mapping."""
        return cls(
            ItemDefinition(item_id=item_id, **(entry or {}))
            for item_id, entry in (data or {}).items()
        )

    def get(self, item_id: str) -> Optional[ItemDefinition]:
        return self._items.get(item_id)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def __len__(self) -> int:
        return len(self._items)

    def category_of(self, item_id: str) -> ItemCategory:
        """Category of an item; unknown identifiers fall into ``other``."""
        item = self._items.get(item_id)
        return item.category if item is not None else "other"

    def count_by_category(self, item_ids: Iterable[str]) -> Dict[str, int]:
        """Count owned items per category, every category present (possibly 0)."""
        counts = Counter(self.category_of(item_id) for item_id in unique_items(item_ids))
        return {category: counts.get(category, 0) for category in ITEM_CATEGORIES}


def unique_items(item_ids: Optional[Iterable[str]]) -> List[str]:
    """De-duplicate owned item identifiers, keeping first-seen order."""
    if not item_ids:
        return []
    return list(dict.fromkeys(item_ids))
