"""
Generate a synthetic olive mill season from the command line.

Examples:
  # Default season (2024-10-01 -> 2025-01-31), fresh randomness
  oleificio-generate --output season.json

  # Reproducible run
  oleificio-generate --seed 42 --output season.json

  # Settings from a YAML file, validate without writing
  oleificio-generate --config season.yaml --validate-only
"""

import argparse
import json
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any

from .config import ConfigError, SimulationConfig, load_config
from .models import Dataset
from .queries import summarize
from .season import OliveMillSimulator
from .validation import validate_dataset

OUTPUT_PATH = Path("season.json")


def _json_default(value: Any) -> Any:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_json(dataset: Dataset, output_path: Path) -> None:
    """Write every stream of the dataset to a JSON file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w") as f:
        json.dump(dataset.to_dict(), f, default=_json_default, indent=2)


def print_summary(dataset: Dataset) -> None:
    summary = summarize(dataset)
    print("\nSeason summary:")
    for key, value in summary.items():
        print(f"  {key:<28} {value}")


def print_validation(results: dict[str, tuple[bool, str]]) -> bool:
    """Print the validation report; returns True when every check passed."""
    print("\nValidation:")
    for name, (passed, message) in results.items():
        mark = "PASS" if passed else "FAIL"
        print(f"  [{mark}] {name:<24} {message}")
    return all(passed for passed, _ in results.values())


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Generate a synthetic olive mill season dataset",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with SimulationConfig fields",
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for reproducibility (overrides the config file)",
    )

    parser.add_argument(
        "--output",
        type=Path,
        default=OUTPUT_PATH,
        help=f"Output path for the JSON dataset (default: {OUTPUT_PATH})",
    )

    parser.add_argument(
        "--validate-only",
        action="store_true",
        help="Generate and validate data without writing the JSON file",
    )

    parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Skip validation checks after generation",
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Do not print generation progress",
    )

    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """
    Generate a season with CLI interface.

    Returns:
        0 on success, 1 on validation failure, 2 on configuration error
    """
    args = parse_args(argv)

    try:
        config = load_config(args.config) if args.config else SimulationConfig()
        if args.seed is not None:
            config.seed = args.seed
        simulator = OliveMillSimulator(config, verbose=not args.quiet)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    dataset = simulator.generate_season_data()
    print_summary(dataset)

    if not args.skip_validation:
        all_passed = print_validation(validate_dataset(dataset, config))
    else:
        all_passed = True
        print("\nValidation skipped.")

    if not args.validate_only:
        write_json(dataset, args.output)
        print(f"\nOutput: {args.output}")

    if all_passed:
        print("\nSuccess!")
        return 0
    print("\nValidation failed. Review errors above.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
