"""CSV and JSON export of engine outputs."""

from .export import (
    animals_to_dataframe,
    export_animals_csv,
    export_stats_csv,
    export_status_json,
    export_summary_json,
    stats_to_dataframe,
)

__all__ = [
    "stats_to_dataframe",
    "animals_to_dataframe",
    "export_stats_csv",
    "export_animals_csv",
    "export_summary_json",
    "export_status_json",
]
