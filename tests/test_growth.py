"""Unit tests for baby growth and evolution.

These tests verify:
- Experience gain is floor(hours * xp_per_hour * (1 + xp_bonus))
- Experience is capped at the evolution threshold and evolution is never left pending
- Gender is drawn once, at evolution, from the injected random source
- Adults pass through unchanged
"""

import pytest
import sys
import os
from datetime import datetime, timedelta, timezone

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from zooeco.engine.animals import AnimalInstance, FixedClock
from zooeco.engine.growth import GrowthEngine
from zooeco.simulation.runner import ZooEconomyEngine

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class ScriptedRandom:
    """Random source returning a fixed sequence of values."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def baby(species="lion", experience=0, gender=None):
    return AnimalInstance(species=species, age_stage="baby", experience=experience, gender=gender)


class TestExperienceGain:
    """Tests for the experience formula."""

    def test_gain_is_floored(self):
        """Partial experience points are dropped."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        assert engine.experience_gain(4) == 40
        assert engine.experience_gain(0.25) == 2
        assert engine.experience_gain(0.05) == 0

    def test_gain_with_xp_bonus(self):
        """XP bonus scales the gain."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        assert engine.experience_gain(4, xp_bonus=0.2) == 48
        assert engine.experience_gain(4, xp_bonus=0.5) == 60

    def test_non_positive_hours_gain_nothing(self):
        """Negative, zero and NaN hours gain nothing."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        assert engine.experience_gain(0) == 0
        assert engine.experience_gain(-5) == 0
        assert engine.experience_gain(float('nan')) == 0


class TestEvolution:
    """Tests for the baby -> adult transition."""

    def test_below_threshold_stays_baby(self):
        """950 XP + 40 XP = 990, still a baby."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        outcome = engine.advance(baby(experience=950), hours=4)

        assert outcome.gained == 40
        assert outcome.animal.experience == 990
        assert outcome.animal.age_stage == "baby"
        assert outcome.animal.gender is None
        assert outcome.evolved is False

    def test_crossing_threshold_evolves(self):
        """970 XP + 40 XP is clamped to 1000 and the animal evolves."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        outcome = engine.advance(baby(experience=970), hours=4)

        assert outcome.gained == 40  # raw gain is reported, not the clamped delta
        assert outcome.animal.experience == 1000
        assert outcome.animal.age_stage == "adult"
        assert outcome.animal.gender == "female"
        assert outcome.evolved is True

    def test_coin_flip_assigns_male(self):
        """A draw of 0.5 or more gives a male."""
        engine = GrowthEngine(rng=ScriptedRandom([0.5]))
        outcome = engine.advance(baby(experience=999), hours=1)
        assert outcome.animal.gender == "male"

    def test_pending_evolution_completes_without_gain(self):
        """A legacy baby already at the threshold evolves even with zero hours."""
        engine = GrowthEngine(rng=ScriptedRandom([0.9]))
        outcome = engine.advance(baby(experience=1200), hours=0)

        assert outcome.animal.age_stage == "adult"
        assert outcome.animal.experience == 1000
        assert outcome.animal.gender == "male"

    def test_existing_gender_is_kept(self):
        """A legacy baby with a gender keeps it on evolution."""
        rng = ScriptedRandom([0.1])
        engine = GrowthEngine(rng=rng)
        outcome = engine.advance(baby(experience=990, gender="male"), hours=4)

        assert outcome.animal.gender == "male"
        assert rng.calls == 0

    def test_negative_experience_is_floored_at_zero(self):
        """Corrupt negative experience restarts from 0."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        outcome = engine.advance(baby(experience=-50), hours=1)
        assert outcome.animal.experience == 10

    def test_timestamp_is_recorded(self):
        """The growth update instant is stamped on the new record."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        outcome = engine.advance(baby(), hours=1, now=NOW)
        assert outcome.animal.last_growth_update_at == NOW


class TestAdults:
    """Adults are not touched by growth."""

    def test_adult_passthrough(self):
        """Adult records come back as the same object."""
        rng = ScriptedRandom([0.9])
        engine = GrowthEngine(rng=rng)
        adult = AnimalInstance(species="lion", age_stage="adult", gender="female", experience=1000)
        outcome = engine.advance(adult, hours=4)

        assert outcome.animal is adult
        assert outcome.gained == 0
        assert outcome.evolved is False
        assert rng.calls == 0

    def test_gender_never_reassigned(self):
        """Repeated reconciliations leave an adult's gender alone."""
        clock = FixedClock(NOW)
        engine = ZooEconomyEngine(clock=clock, rng=ScriptedRandom([0.9, 0.1]))
        animals = [AnimalInstance(species="lion", age_stage="adult", gender="female", experience=1000)]

        for _ in range(5):
            last_seen = clock()
            clock.advance(4)
            summary = engine.compute_offline_rewards(last_seen, animals, 0)
            animals = summary.updated_animals
            assert summary.elapsed_hours == 4
            assert animals[0].gender == "female"

    def test_baby_grows_across_sessions(self):
        """Successive four-hour sessions accumulate until evolution."""
        clock = FixedClock(NOW)
        engine = ZooEconomyEngine(clock=clock, rng=ScriptedRandom([0.9]))
        animals = [baby(experience=900)]

        for expected in (940, 980):
            last_seen = clock()
            clock.advance(4)
            animals = engine.compute_offline_rewards(last_seen, animals, 0).updated_animals
            assert animals[0].experience == expected
            assert animals[0].last_growth_update_at == clock()

        last_seen = clock()
        clock.advance(4)
        animals = engine.compute_offline_rewards(last_seen, animals, 0).updated_animals
        assert animals[0].age_stage == "adult"
        assert animals[0].gender == "male"
        assert clock() == NOW + timedelta(hours=12)


class TestEstimates:
    """Tests for the hours-to-evolve estimate."""

    def test_estimate_rounds_up_to_tenth(self):
        """Remaining hours are rounded up to 0.1h."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        assert engine.estimate_hours_to_evolve(baby(experience=500)) == 50.0
        assert engine.estimate_hours_to_evolve(baby(experience=995)) == 0.5
        assert engine.estimate_hours_to_evolve(baby(experience=999)) == 0.1

    def test_estimate_with_bonus(self):
        """XP bonus shortens the estimate."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        assert engine.estimate_hours_to_evolve(baby(experience=0), xp_bonus=1.0) == 50.0

    def test_adult_estimate_is_zero(self):
        """Adults have nothing left to grow."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        adult = AnimalInstance(species="lion", age_stage="adult", gender="male", experience=1000)
        assert engine.estimate_hours_to_evolve(adult) == 0.0

    def test_no_estimate_without_growth(self):
        """A bonus of -100% or worse stops growth, so there is no estimate."""
        engine = GrowthEngine(rng=ScriptedRandom([0.1]))
        assert engine.estimate_hours_to_evolve(baby(experience=500), xp_bonus=-1.0) is None
        assert engine.estimate_hours_to_evolve(baby(experience=500), xp_bonus=-1.5) is None
