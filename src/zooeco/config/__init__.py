"""Configuration, tuning constants and catalogs."""

from .catalog import (
    ITEM_CATEGORIES,
    ItemCatalog,
    ItemDefinition,
    ItemEffect,
    SpeciesCatalog,
    SpeciesEconomyProfile,
    unique_items,
)
from .loader import (
    config_from_dict,
    load_config,
    load_item_catalog,
    load_species_catalog,
)
from .schema import Config

__all__ = [
    "Config",
    "load_config",
    "config_from_dict",
    "load_species_catalog",
    "load_item_catalog",
    "SpeciesCatalog",
    "SpeciesEconomyProfile",
    "ItemCatalog",
    "ItemDefinition",
    "ItemEffect",
    "ITEM_CATEGORIES",
    "unique_items",
]
