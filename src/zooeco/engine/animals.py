"""Animal records and the injectable time and randomness sources.

Key Concepts:
- An animal is born a baby with 0 experience and becomes an adult exactly once
- Only adults carry a gender; it is drawn at evolution and never reassigned
- "Now" and coin flips come from injected sources so results are reproducible
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol, Union

import numpy as np

AGE_STAGES = ("baby", "adult")
GENDERS = ("male", "female")

Timestamp = Union[datetime, str]
Clock = Callable[[], datetime]


class RandomSource(Protocol):
    """Anything with ``random() -> float`` in [0, 1), e.g. ``numpy.random.Generator``."""

    def random(self) -> float: ...


def utc_now() -> datetime:
    """Default clock: the current UTC instant."""
    return datetime.now(timezone.utc)


class FixedClock:
    """Clock that always returns the same instant; advance it explicitly."""

    def __init__(self, instant: Timestamp):
        self.instant = to_datetime(instant)

    def __call__(self) -> datetime:
        return self.instant

    def advance(self, hours: float) -> datetime:
        self.instant = self.instant + timedelta(hours=hours)
        return self.instant


def default_random_source(seed: Optional[int] = None) -> RandomSource:
    """numpy Generator used when the caller does not inject one."""
    return np.random.default_rng(seed)


def to_datetime(value: Timestamp) -> datetime:
    """
    Normalise a timestamp to an aware UTC datetime.

    Args:
        value: datetime (naive values are read as UTC) or ISO-8601 string,
            a trailing ``Z`` is accepted

    Returns:
        Timezone-aware datetime
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Unsupported timestamp: {value!r}")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def elapsed_hours(since: Timestamp, now: datetime) -> float:
    """Hours between ``since`` and ``now``; may be negative or NaN for bad input."""
    try:
        start = to_datetime(since)
    except (TypeError, ValueError):
        return math.nan
    return (now - start).total_seconds() / 3600.0


@dataclass
class AnimalInstance:
    """One owned creature."""
    species: str
    age_stage: str = "baby"  # "baby" | "adult"
    experience: int = 0
    acquired_at: Optional[datetime] = None
    last_growth_update_at: Optional[datetime] = None
    gender: Optional[str] = None  # only set on adults
    animal_id: Optional[Any] = None  # caller-owned identifier, passed through

    @property
    def is_baby(self) -> bool:
        return self.age_stage == "baby"

    @property
    def is_adult(self) -> bool:
        return self.age_stage == "adult"

    @classmethod
    def newborn(cls, species: str, now: datetime) -> 'AnimalInstance':
        """A fresh baby with no experience."""
        return cls(
            species=species,
            age_stage="baby",
            experience=0,
            acquired_at=now,
            last_growth_update_at=now,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AnimalInstance':
        """
        Create an animal from a JSON-style record.

        Raises:
            ValueError: If the species is missing or the age stage / gender
                is not recognised
        """
        species = data.get("species")
        if not species:
            raise ValueError(f"Animal record without species: {data!r}")

        age_stage = data.get("age_stage", "baby")
        if age_stage not in AGE_STAGES:
            raise ValueError(f"Unknown age stage {age_stage!r} for {species}")

        gender = data.get("gender")
        if gender is not None and gender not in GENDERS:
            raise ValueError(f"Unknown gender {gender!r} for {species}")

        acquired_at = data.get("acquired_at")
        last_update = data.get("last_growth_update_at")
        return cls(
            species=species,
            age_stage=age_stage,
            experience=int(data.get("experience") or 0),
            acquired_at=to_datetime(acquired_at) if acquired_at else None,
            last_growth_update_at=to_datetime(last_update) if last_update else None,
            gender=gender,
            animal_id=data.get("animal_id"),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly record."""
        return {
            "animal_id": self.animal_id,
            "species": self.species,
            "age_stage": self.age_stage,
            "gender": self.gender,
            "experience": self.experience,
            "acquired_at": self.acquired_at.isoformat() if self.acquired_at else None,
            "last_growth_update_at": (
                self.last_growth_update_at.isoformat() if self.last_growth_update_at else None
            ),
        }


AnimalLike = Union[AnimalInstance, Dict[str, Any]]


def coerce_animals(animals: Optional[Iterable[AnimalLike]]) -> List[AnimalInstance]:
    """Accept animal instances or dict records and return instances."""
    result = []
    for animal in animals or []:
        if isinstance(animal, AnimalInstance):
            result.append(animal)
        else:
            result.append(AnimalInstance.from_dict(animal))
    return result
