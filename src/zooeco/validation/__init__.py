"""Validation and sanity checks for the zoo economy engine."""

from .sanity_checks import SanityChecker, ValidationWarning, validate_offline_rewards

__all__ = [
    "SanityChecker",
    "ValidationWarning",
    "validate_offline_rewards"
]
