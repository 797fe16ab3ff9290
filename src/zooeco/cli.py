"""
Command-line interface for inspecting a zoo saved as JSON.

The zoo file holds the same data a request handler would pass to the engine:

    {
      "animals": [{"species": "lion", "age_stage": "baby", "experience": 950}],
      "coins": 120,
      "owned_items": ["savanna", "kiosk"],
      "ticket_price": 1.5,
      "last_seen_at": "2026-01-01T08:00:00Z",
      "last_breeding_check_at": "2026-01-01T08:00:00Z"
    }
"""

import argparse
import json
import logging
import sys

from .config.loader import load_config
from .engine.animals import FixedClock, coerce_animals, utc_now
from .infrastructure.logging import setup_logging
from .simulation.runner import ZooEconomyEngine
from .validation.sanity_checks import validate_offline_rewards

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="zooeco",
        description="Zoo economy engine",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Hourly rates for the current zoo
  zooeco status zoo.json

  # Reconcile offline time as of a fixed instant
  zooeco offline zoo.json --now 2026-01-01T12:00:00Z --validate
""",
    )
    parser.add_argument("--config", help="Alternative YAML tuning file")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    parser.add_argument("--seed", type=int, help="Random seed for gender assignment")
    parser.add_argument("--now", help="ISO-8601 instant to use instead of the current time")

    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("status", "Hourly income, upkeep and visitor rates"),
        ("offline", "Reconcile time since last_seen_at"),
        ("breed", "Run one breeding check"),
        ("stats", "Per-species headcounts"),
        ("sell", "Sell price of one animal"),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("zoo_file", help="Path to the zoo JSON file")
        if name == "offline":
            cmd.add_argument("--validate", action="store_true", help="Run sanity checks on the result")
        if name == "sell":
            cmd.add_argument("--index", type=int, required=True, help="Index of the animal to price")

    return parser.parse_args(argv)


def build_engine(args) -> ZooEconomyEngine:
    """Build an engine from command-line options."""
    config = load_config(args.config) if args.config else load_config()
    if args.seed is not None:
        config.random_seed = args.seed
    clock = FixedClock(args.now) if args.now else utc_now
    return ZooEconomyEngine(config=config, clock=clock)


def run(args) -> dict:
    """Execute one subcommand and return its JSON-friendly result."""
    with open(args.zoo_file, 'r') as f:
        zoo = json.load(f)

    engine = build_engine(args)
    animals = zoo.get("animals", [])
    owned_items = zoo.get("owned_items", [])
    ticket_price = zoo.get("ticket_price")

    if args.command == "status":
        return engine.compute_economy_status(animals, owned_items, ticket_price).to_dict()

    if args.command == "offline":
        summary = engine.compute_offline_rewards(
            zoo.get("last_seen_at") or engine.clock(),
            animals,
            zoo.get("coins", 0),
            owned_items,
            ticket_price
        )
        result = summary.to_dict()
        if args.validate:
            warnings = validate_offline_rewards(
                engine.config,
                coerce_animals(animals),
                summary,
                engine.species
            )
            result['warnings'] = [w.__dict__ for w in warnings]
        return result

    if args.command == "breed":
        breeding = engine.compute_breeding(
            animals, zoo.get("last_breeding_check_at") or engine.clock()
        )
        return {
            'new_babies': [a.to_dict() for a in breeding.new_babies],
            'breeding_pairs': [p.__dict__ for p in breeding.breeding_pairs],
            'gate_open': breeding.gate_open,
        }

    if args.command == "stats":
        return {'stats': [s.to_dict() for s in engine.compute_animal_stats(animals)]}

    if args.command == "sell":
        if not 0 <= args.index < len(animals):
            raise ValueError(f"No animal at index {args.index}")
        return {'index': args.index, 'sell_price': engine.compute_sell_price(animals[args.index])}

    raise ValueError(f"Unknown command {args.command!r}")


def main(argv=None) -> int:
    """Console entry point."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    try:
        result = run(args)
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    json.dump(result, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
