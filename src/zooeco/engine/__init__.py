"""Zoo economy engine components."""

from .animals import (
    AnimalInstance,
    FixedClock,
    RandomSource,
    coerce_animals,
    default_random_source,
    elapsed_hours,
    to_datetime,
    utc_now,
)
from .appeal import AttractivenessModel, SatisfactionModel
from .appraisal import SellPriceAppraiser
from .bonuses import BonusResolver, EconomyBonusVector
from .breeding import BreedingPair, BreedingResult, BreedingSimulator
from .demand import ElasticDemandModel
from .growth import GrowthEngine, GrowthOutcome
from .ledger import EconomyLedger, EvolutionEvent, LedgerResult
from .stats import SpeciesBreedingStats, StatsAggregator

__all__ = [
    # Animals and injected sources
    "AnimalInstance",
    "FixedClock",
    "RandomSource",
    "coerce_animals",
    "default_random_source",
    "elapsed_hours",
    "to_datetime",
    "utc_now",
    # Models
    "BonusResolver",
    "EconomyBonusVector",
    "ElasticDemandModel",
    "GrowthEngine",
    "GrowthOutcome",
    "AttractivenessModel",
    "SatisfactionModel",
    "EconomyLedger",
    "EvolutionEvent",
    "LedgerResult",
    "BreedingSimulator",
    "BreedingPair",
    "BreedingResult",
    "StatsAggregator",
    "SpeciesBreedingStats",
    "SellPriceAppraiser",
]
