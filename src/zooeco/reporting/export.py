"""Export functionality for CSV and JSON."""

import json
from typing import Iterable, List

import pandas as pd

from ..engine.animals import AnimalInstance
from ..engine.stats import SpeciesBreedingStats
from ..simulation.offline import OfflineRewardsSummary
from ..simulation.status import EconomyStatusSnapshot


def stats_to_dataframe(stats: Iterable[SpeciesBreedingStats]) -> pd.DataFrame:
    """Per-species headcounts as a DataFrame."""
    columns = ['species', 'babies', 'females', 'males', 'can_breed']
    return pd.DataFrame([s.to_dict() for s in stats], columns=columns)


def animals_to_dataframe(animals: Iterable[AnimalInstance]) -> pd.DataFrame:
    """Animal list as a DataFrame."""
    columns = [
        'animal_id', 'species', 'age_stage', 'gender', 'experience',
        'acquired_at', 'last_growth_update_at'
    ]
    return pd.DataFrame([a.to_dict() for a in animals], columns=columns)


def export_stats_csv(stats: List[SpeciesBreedingStats], filepath: str):
    """Export per-species stats to CSV."""
    stats_to_dataframe(stats).to_csv(filepath, index=False)


def export_animals_csv(animals: List[AnimalInstance], filepath: str):
    """Export an animal list to CSV."""
    animals_to_dataframe(animals).to_csv(filepath, index=False)


def export_summary_json(summary: OfflineRewardsSummary, filepath: str, config_hash: str = None):
    """Export an offline rewards summary to JSON."""
    export_data = summary.to_dict()
    if config_hash:
        export_data['config_hash'] = config_hash

    with open(filepath, 'w') as f:
        json.dump(export_data, f, indent=2)


def export_status_json(status: EconomyStatusSnapshot, filepath: str, config_hash: str = None):
    """Export an economy status snapshot to JSON."""
    export_data = status.to_dict()
    if config_hash:
        export_data['config_hash'] = config_hash

    with open(filepath, 'w') as f:
        json.dump(export_data, f, indent=2)
