"""Tests for sanity checks, exports and the command-line interface."""

import json
import pytest
import sys
import os
from datetime import datetime, timedelta, timezone

import pandas as pd

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from zooeco import cli
from zooeco.config.catalog import ItemCatalog
from zooeco.config.loader import config_from_dict, load_config, load_species_catalog
from zooeco.engine.animals import AnimalInstance, FixedClock
from zooeco.reporting.export import (
    animals_to_dataframe,
    export_animals_csv,
    export_stats_csv,
    export_status_json,
    export_summary_json,
    stats_to_dataframe,
)
from zooeco.simulation.runner import ZooEconomyEngine
from zooeco.validation.sanity_checks import SanityChecker, validate_offline_rewards

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


def sample_zoo():
    return [
        AnimalInstance(species="lion", age_stage="baby", experience=980),
        AnimalInstance(species="lion", age_stage="adult", gender="female", experience=1000),
        AnimalInstance(species="lion", age_stage="adult", gender="male", experience=1000),
    ]


class TestSanityChecks:
    """Sanity checks on tuning, inputs and outputs."""

    def test_default_config_is_clean(self):
        """Shipped defaults raise no warnings."""
        assert SanityChecker(load_config()).check_config_inputs() == []

    def test_fast_evolution_flagged(self):
        """Babies evolving inside one reconciliation are flagged."""
        config = config_from_dict({'growth': {'xp_per_hour': 500}})
        warnings = SanityChecker(config).check_config_inputs()
        assert any("evolve" in w.message for w in warnings)

    def test_high_elasticity_flagged(self):
        """Elasticity above 0.8 is flagged."""
        config = config_from_dict({'pricing': {'elasticity': 0.9}})
        warnings = SanityChecker(config).check_config_inputs()
        assert any(w.category == "bounds" for w in warnings)

    def test_animal_invariants(self):
        """Broken lifecycle records are reported."""
        checker = SanityChecker(load_config(), load_species_catalog())
        animals = [
            AnimalInstance(species="lion", age_stage="adult", experience=1000),
            AnimalInstance(species="lion", age_stage="baby", experience=1500),
            AnimalInstance(species="lion", age_stage="baby", experience=-5),
            AnimalInstance(species="lion", age_stage="baby", gender="male", experience=10),
            AnimalInstance(species="dragon", age_stage="baby", experience=10),
        ]
        warnings = checker.check_animals(animals)
        messages = [w.message for w in warnings]

        assert "Adult #0 lion has no gender" in messages
        assert any(m.startswith("Baby #1 lion reached") for m in messages)
        assert "Negative experience for #2 lion" in messages
        assert "Baby #3 lion carries a gender" in messages
        assert "Unknown species for #4 dragon" in messages

    def test_valid_reconciliation_has_no_errors(self):
        """A normal reconciliation passes every check."""
        engine = ZooEconomyEngine(clock=FixedClock(NOW))
        animals = sample_zoo()
        summary = engine.compute_offline_rewards(NOW - timedelta(hours=4), animals, 100)
        warnings = validate_offline_rewards(engine.config, animals, summary, engine.species)

        assert [w for w in warnings if w.severity == "error"] == []

    def test_deficit_flagged(self):
        """Upkeep above income is a sustainability warning."""
        config = config_from_dict({
            'maintenance': {'baby': 50, 'adult_female': 60, 'adult_male': 70}
        })
        engine = ZooEconomyEngine(config=config, clock=FixedClock(NOW))
        summary = engine.compute_offline_rewards(NOW - timedelta(hours=4), sample_zoo(), 100)
        warnings = SanityChecker(config).check_summary(summary)

        assert [w.category for w in warnings] == ["sustainability"]


class TestExport:
    """CSV and JSON exports."""

    def test_stats_dataframe(self):
        """Stats become one row per species."""
        engine = ZooEconomyEngine(clock=FixedClock(NOW))
        df = stats_to_dataframe(engine.compute_animal_stats(sample_zoo()))

        assert list(df.columns) == ['species', 'babies', 'females', 'males', 'can_breed']
        assert len(df) == 1
        assert bool(df.loc[0, 'can_breed']) is True

    def test_empty_animals_dataframe_has_columns(self):
        """An empty list still yields the expected columns."""
        df = animals_to_dataframe([])
        assert df.empty
        assert 'species' in df.columns

    def test_csv_exports(self, tmp_path):
        """Stats and animals are written as CSV."""
        engine = ZooEconomyEngine(clock=FixedClock(NOW))
        animals = sample_zoo()
        export_stats_csv(engine.compute_animal_stats(animals), tmp_path / "stats.csv")
        export_animals_csv(animals, tmp_path / "animals.csv")

        stats = pd.read_csv(tmp_path / "stats.csv")
        assert stats.loc[0, 'species'] == "lion"
        assert stats.loc[0, 'babies'] == 1
        assert len(pd.read_csv(tmp_path / "animals.csv")) == 3

    def test_json_exports(self, tmp_path):
        """Summary and status JSON carry the config hash."""
        engine = ZooEconomyEngine(clock=FixedClock(NOW))
        summary = engine.compute_offline_rewards(NOW - timedelta(hours=4), sample_zoo(), 100)
        status = engine.compute_economy_status(sample_zoo(), ["savanna"], 1.0)
        config_hash = engine.config.compute_hash()

        export_summary_json(summary, tmp_path / "summary.json", config_hash)
        export_status_json(status, tmp_path / "status.json", config_hash)

        with open(tmp_path / "summary.json") as f:
            data = json.load(f)
        assert data['final_coins'] == summary.final_coins
        assert data['config_hash'] == config_hash

        with open(tmp_path / "status.json") as f:
            data = json.load(f)
        assert data['attractiveness'] == status.attractiveness

    def test_stalled_growth_exports_valid_json(self, tmp_path):
        """A baby that cannot grow has no estimate and the JSON stays strict."""
        items = ItemCatalog.from_dict({
            'sleeping_pill': {'category': 'other', 'effects': [{'type': 'xp_bonus', 'value': -1.0}]}
        })
        engine = ZooEconomyEngine(items=items, clock=FixedClock(NOW))
        status = engine.compute_economy_status(sample_zoo(), ["sleeping_pill"], 1.0)
        assert status.next_evolution.hours_until_evolution is None

        export_status_json(status, tmp_path / "status.json")

        def reject_constant(name):
            raise ValueError(f"non-standard JSON constant {name}")

        with open(tmp_path / "status.json") as f:
            data = json.load(f, parse_constant=reject_constant)
        assert data['next_evolution']['hours_until_evolution'] is None


class TestCli:
    """Command-line interface."""

    @pytest.fixture(autouse=True)
    def _keep_logging(self, monkeypatch):
        monkeypatch.setattr(cli, "setup_logging", lambda *args, **kwargs: None)

    def write_zoo(self, tmp_path, **overrides):
        zoo = {
            "animals": [a.to_dict() for a in sample_zoo()],
            "coins": 100,
            "owned_items": ["savanna", "kiosk"],
            "ticket_price": 1.0,
            "last_seen_at": "2026-01-01T08:00:00Z",
            "last_breeding_check_at": "2025-12-31T08:00:00Z",
        }
        zoo.update(overrides)
        path = tmp_path / "zoo.json"
        path.write_text(json.dumps(zoo))
        return str(path)

    def run_cli(self, capsys, argv):
        code = cli.main(argv)
        return code, capsys.readouterr().out

    def test_status(self, tmp_path, capsys):
        """status prints the hourly snapshot."""
        code, out = self.run_cli(capsys, ["status", self.write_zoo(tmp_path)])
        assert code == 0
        data = json.loads(out)
        assert data['has_kiosk'] is True
        assert data['total_animals'] == 3

    def test_offline_with_validation(self, tmp_path, capsys):
        """offline reconciles four hours and reports no errors."""
        code, out = self.run_cli(capsys, [
            "--now", "2026-01-01T12:00:00Z", "--seed", "7",
            "offline", self.write_zoo(tmp_path), "--validate",
        ])
        assert code == 0
        data = json.loads(out)
        assert data['elapsed_hours'] == 4
        assert data['updated_animals'][0]['age_stage'] == "adult"
        assert [w for w in data['warnings'] if w['severity'] == "error"] == []

    def test_breed(self, tmp_path, capsys):
        """breed yields one baby for one pair."""
        code, out = self.run_cli(capsys, [
            "--now", "2026-01-01T12:00:00Z", "breed", self.write_zoo(tmp_path),
        ])
        assert code == 0
        data = json.loads(out)
        assert data['gate_open'] is True
        assert len(data['new_babies']) == 1

    def test_stats_and_sell(self, tmp_path, capsys):
        """stats and sell print counts and prices."""
        path = self.write_zoo(tmp_path)
        code, out = self.run_cli(capsys, ["stats", path])
        assert code == 0
        assert json.loads(out)['stats'][0]['males'] == 1

        code, out = self.run_cli(capsys, ["sell", path, "--index", "2"])
        assert code == 0
        assert json.loads(out)['sell_price'] == 600

    def test_bad_index_fails(self, tmp_path, capsys):
        """An out-of-range index exits with status 1."""
        code, _ = self.run_cli(capsys, ["sell", self.write_zoo(tmp_path), "--index", "9"])
        assert code == 1

    def test_missing_file_fails(self, tmp_path, capsys):
        """A missing zoo file exits with status 1."""
        code, _ = self.run_cli(capsys, ["status", str(tmp_path / "missing.json")])
        assert code == 1
