"""Orchestration: offline rewards, status snapshot and the engine facade."""

from .offline import OfflineRewardsPipeline, OfflineRewardsSummary, clamp_hours
from .runner import (
    ZooEconomyEngine,
    compute_animal_stats,
    compute_breeding,
    compute_economy_status,
    compute_offline_rewards,
    compute_sell_price,
    get_default_engine,
)
from .status import EconomyStatusModel, EconomyStatusSnapshot, NextEvolution

__all__ = [
    "ZooEconomyEngine",
    "get_default_engine",
    "compute_offline_rewards",
    "compute_breeding",
    "compute_economy_status",
    "compute_animal_stats",
    "compute_sell_price",
    "OfflineRewardsPipeline",
    "OfflineRewardsSummary",
    "clamp_hours",
    "EconomyStatusModel",
    "EconomyStatusSnapshot",
    "NextEvolution",
]
