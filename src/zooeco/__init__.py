"""Zoo economy simulation engine.

Reconciles elapsed wall-clock time into passive income, animal growth and
evolution, breeding, and a steady-state economic snapshot.
"""

from .engine.animals import AnimalInstance, FixedClock
from .simulation.runner import (
    ZooEconomyEngine,
    compute_animal_stats,
    compute_breeding,
    compute_economy_status,
    compute_offline_rewards,
    compute_sell_price,
)

__version__ = "1.0.0"

__all__ = [
    "AnimalInstance",
    "FixedClock",
    "ZooEconomyEngine",
    "compute_offline_rewards",
    "compute_breeding",
    "compute_economy_status",
    "compute_animal_stats",
    "compute_sell_price",
]
