"""Engine facade - the function-call surface used by request handlers.

Key Features:
- One place that wires config, catalogs and models together
- "Now" and the gender coin flip come from an injected clock and random source
- Animals may be passed as AnimalInstance objects or JSON-style dicts
- Pure computation: persistence and per-user serialisation belong to the caller
"""

import logging
import threading
from typing import Iterable, List, Optional

from ..config.catalog import ItemCatalog, SpeciesCatalog
from ..config.loader import load_config, load_item_catalog, load_species_catalog
from ..config.schema import Config
from ..engine.animals import (
    AnimalInstance,
    AnimalLike,
    Clock,
    RandomSource,
    Timestamp,
    coerce_animals,
    default_random_source,
    elapsed_hours,
    to_datetime,
    utc_now,
)
from ..engine.appeal import AttractivenessModel, SatisfactionModel
from ..engine.appraisal import SellPriceAppraiser
from ..engine.bonuses import BonusResolver
from ..engine.breeding import BreedingResult, BreedingSimulator
from ..engine.demand import ElasticDemandModel
from ..engine.growth import GrowthEngine
from ..engine.ledger import EconomyLedger
from ..engine.stats import SpeciesBreedingStats, StatsAggregator
from .offline import OfflineRewardsPipeline, OfflineRewardsSummary
from .status import EconomyStatusModel, EconomyStatusSnapshot

logger = logging.getLogger(__name__)


class ZooEconomyEngine:
    """Zoo economy engine with injectable clock and random source."""

    def __init__(
        self,
        config: Config = None,
        species: SpeciesCatalog = None,
        items: ItemCatalog = None,
        clock: Clock = None,
        rng: RandomSource = None
    ):
        """
        Initialize engine.

        Args:
            config: Tuning constants (defaults.yaml if omitted)
            species: Species economy catalog (species.yaml if omitted)
            items: Tagged item catalog (items.yaml if omitted)
            clock: Callable returning the current aware datetime
            rng: Random source for gender assignment
        """
        self.config = config or load_config()
        self.species = species or load_species_catalog()
        self.items = items or load_item_catalog()
        self.clock = clock or utc_now
        self.rng = rng or default_random_source(self.config.random_seed)

        cfg = self.config
        self.bonus_resolver = BonusResolver(
            items=self.items,
            max_cost_reduction=cfg.bonuses.max_cost_reduction
        )
        self.demand = ElasticDemandModel(
            reference_price=cfg.pricing.reference_price,
            elasticity=cfg.pricing.elasticity,
            min_price=cfg.pricing.min_price,
            max_price=cfg.pricing.max_price
        )
        self.growth = GrowthEngine(
            rng=self.rng,
            xp_per_hour=cfg.growth.xp_per_hour,
            evolution_threshold=cfg.growth.evolution_threshold
        )
        self.ledger = EconomyLedger(
            species=self.species,
            demand=self.demand,
            growth=self.growth,
            baby_cost=cfg.maintenance.baby,
            female_cost=cfg.maintenance.adult_female,
            male_cost=cfg.maintenance.adult_male,
            per_animal_cost_growth=cfg.maintenance.per_animal_cost_growth,
            coin_cap=cfg.offline.coin_cap
        )
        self.attractiveness = AttractivenessModel(
            items=self.items,
            per_animal=cfg.attractiveness.per_animal,
            per_habitat=cfg.attractiveness.per_habitat,
            per_decoration=cfg.attractiveness.per_decoration,
            per_toy=cfg.attractiveness.per_toy,
            visitors_per_point=cfg.attractiveness.visitors_per_point
        )
        self.satisfaction = SatisfactionModel(
            items=self.items,
            base=cfg.satisfaction.base,
            per_animal=cfg.satisfaction.per_animal,
            animal_cap=cfg.satisfaction.animal_cap,
            per_food_item=cfg.satisfaction.per_food_item,
            kiosk_boost=cfg.satisfaction.kiosk_boost,
            visitor_multiplier_per_point=cfg.satisfaction.visitor_multiplier_per_point
        )
        self.breeding = BreedingSimulator(
            species=self.species,
            interval_hours=cfg.breeding.interval_hours
        )
        self.stats = StatsAggregator()
        self.appraiser = SellPriceAppraiser(
            species=self.species,
            hour_multiplier=cfg.appraisal.hour_multiplier,
            baby_factor=cfg.appraisal.baby_factor,
            female_factor=cfg.appraisal.female_factor,
            male_factor=cfg.appraisal.male_factor
        )
        self.offline = OfflineRewardsPipeline(
            bonuses=self.bonus_resolver,
            demand=self.demand,
            ledger=self.ledger,
            clock=self.clock,
            max_offline_hours=cfg.offline.max_offline_hours
        )
        self.status = EconomyStatusModel(
            species=self.species,
            bonuses=self.bonus_resolver,
            demand=self.demand,
            attractiveness=self.attractiveness,
            satisfaction=self.satisfaction,
            ledger=self.ledger,
            growth=self.growth,
            base_daily_visitors=cfg.visitors.base_daily,
            kiosk_item_id=cfg.kiosk.item_id,
            kiosk_revenue_per_visitor=cfg.kiosk.revenue_per_visitor
        )

    def compute_offline_rewards(
        self,
        last_seen_at: Timestamp,
        animals: Iterable[AnimalLike],
        coins: float,
        owned_items: Iterable[str] = (),
        ticket_price: Optional[float] = None
    ) -> OfflineRewardsSummary:
        """Reconcile the time since the player was last seen."""
        return self.offline.run(
            last_seen_at,
            coerce_animals(animals),
            coins,
            owned_items=owned_items,
            ticket_price=ticket_price
        )

    def compute_breeding(
        self,
        animals: Iterable[AnimalLike],
        last_breeding_check_at: Timestamp
    ) -> BreedingResult:
        """Run one breeding check against the cadence gate."""
        now = to_datetime(self.clock())
        hours = elapsed_hours(last_breeding_check_at, now)
        return self.breeding.breed(coerce_animals(animals), hours, now)

    def compute_economy_status(
        self,
        animals: Iterable[AnimalLike],
        owned_items: Iterable[str] = (),
        ticket_price: Optional[float] = None
    ) -> EconomyStatusSnapshot:
        """Hourly economy view for the current instant."""
        return self.status.snapshot(coerce_animals(animals), owned_items, ticket_price)

    def compute_animal_stats(self, animals: Iterable[AnimalLike]) -> List[SpeciesBreedingStats]:
        """Per-species headcounts and breeding eligibility."""
        return self.stats.aggregate(coerce_animals(animals))

    def compute_sell_price(self, animal: AnimalLike, species: Optional[str] = None) -> int:
        """Liquidation price of one animal."""
        if not isinstance(animal, AnimalInstance):
            animal = AnimalInstance.from_dict(animal)
        return self.appraiser.appraise(animal, species)


_default_engine: Optional[ZooEconomyEngine] = None
_default_engine_lock = threading.Lock()


def get_default_engine() -> ZooEconomyEngine:
    """Engine built from the packaged defaults, created on first use."""
    global _default_engine
    if _default_engine is None:
        with _default_engine_lock:
            if _default_engine is None:
                _default_engine = ZooEconomyEngine()
    return _default_engine


def compute_offline_rewards(last_seen_at, animals, coins, owned_items=(), ticket_price=None):
    return get_default_engine().compute_offline_rewards(
        last_seen_at, animals, coins, owned_items, ticket_price
    )


def compute_breeding(animals, last_breeding_check_at):
    return get_default_engine().compute_breeding(animals, last_breeding_check_at)


def compute_economy_status(animals, owned_items=(), ticket_price=None):
    return get_default_engine().compute_economy_status(animals, owned_items, ticket_price)


def compute_animal_stats(animals):
    return get_default_engine().compute_animal_stats(animals)


def compute_sell_price(animal, species=None):
    return get_default_engine().compute_sell_price(animal, species)
