"""Sanity checks for tuning, animal lists and reconciliation outputs."""

import math
from dataclasses import dataclass
from typing import List, Optional

from ..config.catalog import SpeciesCatalog
from ..config.schema import Config
from ..engine.animals import AGE_STAGES, GENDERS, AnimalInstance
from ..simulation.offline import OfflineRewardsSummary


@dataclass
class ValidationWarning:
    """A validation warning with severity and message."""
    severity: str  # "warning" or "error"
    category: str  # e.g., "input", "invariant", "bounds"
    message: str
    details: Optional[str] = None


class SanityChecker:
    """Run sanity checks on configuration and engine state."""

    def __init__(self, config: Config, species: SpeciesCatalog = None):
        """Initialize with configuration and, optionally, the species catalog."""
        self.config = config
        self.species = species

    def check_config_inputs(self) -> List[ValidationWarning]:
        """
        Check configuration inputs for implausible values.

        Returns:
            List of validation warnings
        """
        warnings = []
        cfg = self.config

        # Elasticity near 1 makes demand fall almost as fast as price rises
        if cfg.pricing.elasticity > 0.8:
            warnings.append(ValidationWarning(
                severity="warning",
                category="bounds",
                message="Price elasticity above 0.8 makes ticket pricing nearly revenue-neutral",
                details=f"Current value: {cfg.pricing.elasticity}"
            ))

        hours_to_evolve = cfg.growth.evolution_threshold / cfg.growth.xp_per_hour
        if hours_to_evolve < cfg.offline.max_offline_hours:
            warnings.append(ValidationWarning(
                severity="warning",
                category="input",
                message="Babies can evolve within a single offline reconciliation",
                details=(
                    f"{hours_to_evolve:.1f}h to evolve vs "
                    f"{cfg.offline.max_offline_hours:.1f}h offline cap"
                )
            ))

        if cfg.breeding.interval_hours < cfg.offline.max_offline_hours:
            warnings.append(ValidationWarning(
                severity="warning",
                category="input",
                message="Breeding interval is shorter than the offline cap",
                details=(
                    f"Interval {cfg.breeding.interval_hours:.1f}h, "
                    f"offline cap {cfg.offline.max_offline_hours:.1f}h"
                )
            ))

        base_satisfaction_max = (
            cfg.satisfaction.base + cfg.satisfaction.animal_cap + cfg.satisfaction.kiosk_boost
        )
        if base_satisfaction_max < 100 and cfg.satisfaction.per_food_item == 0:
            warnings.append(ValidationWarning(
                severity="warning",
                category="bounds",
                message="Satisfaction can never reach 100",
                details=f"Maximum reachable: {base_satisfaction_max:.0f}"
            ))

        if cfg.bonuses.max_cost_reduction >= 1.0:
            warnings.append(ValidationWarning(
                severity="warning",
                category="bounds",
                message="Cost reduction cap of 100% allows a zoo with no upkeep",
                details=f"Current cap: {cfg.bonuses.max_cost_reduction*100:.0f}%"
            ))

        return warnings

    def check_animals(self, animals: List[AnimalInstance]) -> List[ValidationWarning]:
        """
        Check an animal list against the lifecycle invariants.

        Args:
            animals: Animal list

        Returns:
            List of validation warnings
        """
        warnings = []
        threshold = self.config.growth.evolution_threshold

        for index, animal in enumerate(animals):
            label = f"#{index} {animal.species}"

            if animal.age_stage not in AGE_STAGES:
                warnings.append(ValidationWarning(
                    severity="error",
                    category="input",
                    message=f"Unknown age stage for {label}",
                    details=f"Value: {animal.age_stage!r}"
                ))
                continue

            if animal.gender is not None and animal.gender not in GENDERS:
                warnings.append(ValidationWarning(
                    severity="error",
                    category="input",
                    message=f"Unknown gender for {label}",
                    details=f"Value: {animal.gender!r}"
                ))

            if animal.is_adult and not animal.gender:
                warnings.append(ValidationWarning(
                    severity="error",
                    category="invariant",
                    message=f"Adult {label} has no gender",
                ))

            if animal.is_baby and animal.gender:
                warnings.append(ValidationWarning(
                    severity="warning",
                    category="invariant",
                    message=f"Baby {label} carries a gender",
                    details="Legacy record; gender is ignored until evolution"
                ))

            if animal.experience < 0:
                warnings.append(ValidationWarning(
                    severity="error",
                    category="bounds",
                    message=f"Negative experience for {label}",
                    details=f"Value: {animal.experience}"
                ))

            if animal.is_baby and animal.experience >= threshold:
                warnings.append(ValidationWarning(
                    severity="error",
                    category="invariant",
                    message=f"Baby {label} reached the evolution threshold without evolving",
                    details=f"Experience {animal.experience} >= {threshold}"
                ))

            if self.species is not None and animal.species not in self.species:
                warnings.append(ValidationWarning(
                    severity="warning",
                    category="input",
                    message=f"Unknown species for {label}",
                    details="The animal earns and costs nothing"
                ))

        return warnings

    def check_summary(self, summary: OfflineRewardsSummary) -> List[ValidationWarning]:
        """
        Check an offline rewards summary against the caps.

        Args:
            summary: Reconciliation output

        Returns:
            List of validation warnings
        """
        warnings = []
        cap = self.config.offline.coin_cap
        max_hours = self.config.offline.max_offline_hours

        if not 0 <= summary.final_coins <= cap:
            warnings.append(ValidationWarning(
                severity="error",
                category="bounds",
                message="Final coin balance outside [0, coin_cap]",
                details=f"Balance: {summary.final_coins}, cap: {cap}"
            ))

        if math.isnan(summary.elapsed_hours) or not 0 <= summary.elapsed_hours <= max_hours:
            warnings.append(ValidationWarning(
                severity="error",
                category="bounds",
                message="Credited hours outside [0, max_offline_hours]",
                details=f"Hours: {summary.elapsed_hours}, cap: {max_hours}"
            ))

        if summary.gross_income > 0 and summary.total_cost > summary.gross_income:
            warnings.append(ValidationWarning(
                severity="warning",
                category="sustainability",
                message="Upkeep exceeded income during the offline interval",
                details=f"Income {summary.gross_income}, cost {summary.total_cost}"
            ))

        return warnings


def validate_offline_rewards(
    config: Config,
    animals: List[AnimalInstance],
    summary: OfflineRewardsSummary,
    species: SpeciesCatalog = None
) -> List[ValidationWarning]:
    """
    Validate one complete reconciliation.

    Args:
        config: Engine configuration
        animals: Animal list handed to the reconciliation
        summary: Its output

    Returns:
        List of all validation warnings
    """
    checker = SanityChecker(config, species)
    warnings = []

    warnings.extend(checker.check_config_inputs())
    warnings.extend(checker.check_animals(animals))
    warnings.extend(checker.check_summary(summary))
    # Output animals must satisfy the lifecycle invariants as well
    warnings.extend(
        w for w in checker.check_animals(summary.updated_animals)
        if w.category == "invariant" and w.severity == "error"
    )

    return warnings
