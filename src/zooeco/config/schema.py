"""Pydantic schema for configuration validation."""

import hashlib
import json
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator, model_validator


class Growth(BaseModel):
    """Baby growth parameters."""
    xp_per_hour: float = Field(gt=0, description="Experience gained per hour by a baby animal")
    evolution_threshold: int = Field(gt=0, description="Experience at which a baby becomes an adult")


class Offline(BaseModel):
    """Offline reconciliation caps."""
    max_offline_hours: float = Field(gt=0, description="Maximum hours credited by one reconciliation")
    coin_cap: int = Field(gt=0, description="Maximum coin balance")


class Pricing(BaseModel):
    """Ticket price and demand elasticity."""
    reference_price: float = Field(gt=0, description="Default ticket price")
    min_price: float = Field(gt=0, description="Lowest accepted ticket price")
    max_price: float = Field(gt=0, description="Highest accepted ticket price")
    elasticity: float = Field(gt=0, lt=1, description="Price elasticity exponent")

    @model_validator(mode='after')
    def validate_price_range(self):
        """Ensure min <= reference <= max."""
        if not self.min_price <= self.reference_price <= self.max_price:
            raise ValueError(
                f"Expected min_price <= reference_price <= max_price, got "
                f"{self.min_price} / {self.reference_price} / {self.max_price}"
            )
        return self


class Maintenance(BaseModel):
    """Hourly upkeep per animal."""
    baby: float = Field(ge=0, description="Base upkeep of a baby per hour")
    adult_female: float = Field(ge=0, description="Base upkeep of an adult female per hour")
    adult_male: float = Field(ge=0, description="Base upkeep of an adult male per hour")
    per_animal_cost_growth: float = Field(ge=0, description="Upkeep growth per animal in the zoo")

    @model_validator(mode='after')
    def validate_tiers(self):
        """Upkeep tiers are ordered baby < adult female < adult male."""
        if not self.baby < self.adult_female < self.adult_male:
            raise ValueError(
                "Maintenance tiers must satisfy baby < adult_female < adult_male, got "
                f"{self.baby} / {self.adult_female} / {self.adult_male}"
            )
        return self


class Breeding(BaseModel):
    """Breeding cadence."""
    interval_hours: float = Field(gt=0, description="Minimum hours between breeding checks")


class Visitors(BaseModel):
    """Steady-state visitor baseline."""
    base_daily: float = Field(ge=0, description="Visitors per day without any attractiveness")


class Attractiveness(BaseModel):
    """Weights of the zoo attractiveness score."""
    per_animal: int = Field(ge=0)
    per_habitat: int = Field(ge=0)
    per_decoration: int = Field(ge=0)
    per_toy: int = Field(ge=0)
    visitors_per_point: float = Field(ge=0, description="Hourly visitors per attractiveness point")


class Satisfaction(BaseModel):
    """Weights of the visitor satisfaction score (0-100)."""
    base: float = Field(ge=0, le=100)
    per_animal: float = Field(ge=0)
    animal_cap: float = Field(ge=0, le=100, description="Maximum satisfaction contributed by animals")
    per_food_item: float = Field(ge=0)
    kiosk_boost: float = Field(ge=0)
    visitor_multiplier_per_point: float = Field(ge=0, description="Visitor gain per satisfaction point")


class Kiosk(BaseModel):
    """Kiosk revenue."""
    item_id: str = Field(min_length=1, description="Item identifier that unlocks the kiosk")
    revenue_per_visitor: float = Field(ge=0)


class Appraisal(BaseModel):
    """Sell price of a single animal."""
    hour_multiplier: float = Field(gt=0, description="Hours of adult visitor value an animal is worth")
    baby_factor: float = Field(ge=0, le=1)
    female_factor: float = Field(ge=0, le=1)
    male_factor: float = Field(ge=0, le=1)


class Bonuses(BaseModel):
    """Caps on aggregated item bonuses."""
    max_cost_reduction: float = Field(ge=0, le=1, default=0.9)


class Config(BaseModel):
    """Complete configuration for the zoo economy engine."""
    growth: Growth
    offline: Offline
    pricing: Pricing
    maintenance: Maintenance
    breeding: Breeding
    visitors: Visitors
    attractiveness: Attractiveness
    satisfaction: Satisfaction
    kiosk: Kiosk
    appraisal: Appraisal
    bonuses: Bonuses = Field(default_factory=Bonuses)
    random_seed: Optional[int] = Field(default=None, description="Seed used when no random source is injected")

    @field_validator('random_seed', mode='before')
    @classmethod
    def coerce_random_seed(cls, v):
        """Accept seeds written as strings in YAML."""
        if v is None or v == "":
            return None
        return int(v)

    def compute_hash(self) -> str:
        """Compute config hash for reproducibility."""
        config_dict = self.model_dump()
        config_str = json.dumps(config_dict, sort_keys=True)
        return hashlib.sha256(config_str.encode()).hexdigest()[:16]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create config from dictionary."""
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return self.model_dump()
