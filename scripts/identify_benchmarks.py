"""
Identify benchmarks for thresholdless pollutants.

Matches CEDEN pollutants without an applied threshold to the USEPA Aquatic
Life Benchmarks in two passes and writes:
- thresholdless_benchmarks_by_cas.csv: matches by shared CAS number
- thresholdless_benchmarks_by_synonym.csv: potential matches by shared
  PubChem synonym, each of which must be reviewed and verified

Input files (see config/benchmark_config.yaml):
    input/benchmarks.csv             USEPA benchmark table
    input/ceden-thresholdless.csv    thresholdless pollutant list (CalWQA query)
    input/ceden.csv                  complete CEDEN pollutant list with CAS numbers
    input/ceden-synonyms.csv         PubChem synonyms of CEDEN pollutant names
    input/benchmarks-synonyms.csv    PubChem synonyms of benchmark names

Usage:
    python scripts/identify_benchmarks.py
    python scripts/identify_benchmarks.py --config config/benchmark_config.yaml --review-workbook output/review.xlsx
    python scripts/identify_benchmarks.py --input-dir data/2026 --output-dir output/2026 -v
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.loading.loader import LoadError, TableLoader
from src.matching import build_engine
from src.matching.match_result import BenchmarkMatches
from src.reporting.writer import write_match_tables, write_review_workbook
from src.utils.config_manager import ConfigManager

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = PROJECT_ROOT / "config" / "benchmark_config.yaml"


def build_config(args: argparse.Namespace) -> ConfigManager:
    """Load configuration and apply command-line overrides."""
    config = ConfigManager(Path(args.config), base_path=Path(args.base_dir))

    if args.input_dir:
        config.set_input_dir(Path(args.input_dir))
    if args.output_dir:
        config.set_output_dir(Path(args.output_dir))
    if args.review_workbook:
        config.set_output('review_workbook', args.review_workbook)

    return config


def run(config: ConfigManager) -> BenchmarkMatches:
    """
    Load inputs, match, and write outputs.

    Args:
        config: Run configuration

    Returns:
        BenchmarkMatches of the run

    Raises:
        LoadError: If an input table cannot be loaded (nothing is written)
    """
    tables = TableLoader(config).load_all()
    matches = build_engine(config).run(tables)

    write_match_tables(
        matches,
        config.get_output_path('by_cas'),
        config.get_output_path('by_synonym'),
    )

    workbook = config.get_output_path('review_workbook')
    if workbook:
        write_review_workbook(matches, workbook)

    return matches


def print_summary(matches: BenchmarkMatches, config: ConfigManager) -> None:
    """Print the end-of-run summary block."""
    print(f"\n{'='*60}")
    print("BENCHMARK IDENTIFICATION COMPLETE")
    print(f"{'='*60}")
    print(f"  Thresholdless pollutants: {matches.input_counts.get('thresholdless', 0)}")
    print(f"  Benchmarks:               {matches.input_counts.get('benchmarks', 0)}")
    print(f"  Synonym bridge rows:      {matches.bridge_rows}")
    print(f"  Exact (CAS) matches:      {matches.exact_count}")
    print(f"  Potential (synonym):      {matches.potential_count}  <- review required")
    print(f"  By CAS:     {config.get_output_path('by_cas')}")
    print(f"  By synonym: {config.get_output_path('by_synonym')}")
    workbook = config.get_output_path('review_workbook')
    if workbook:
        print(f"  Workbook:   {workbook}")
    print(f"{'='*60}\n")


def main():
    parser = argparse.ArgumentParser(
        description="Match thresholdless CEDEN pollutants to USEPA aquatic life benchmarks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config", "-c", type=str, default=str(DEFAULT_CONFIG),
        help="YAML configuration file (defaults are used if it does not exist)",
    )
    parser.add_argument(
        "--base-dir", type=str, default=str(PROJECT_ROOT),
        help="Directory that relative input/output paths resolve against",
    )
    parser.add_argument(
        "--input-dir", type=str, default=None,
        help="Read every input file from this directory",
    )
    parser.add_argument(
        "--output-dir", type=str, default=None,
        help="Write the match tables (and workbook) into this directory",
    )
    parser.add_argument(
        "--review-workbook", type=str, default=None,
        help="Also write a formatted Excel review workbook to this path",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Verbose logging",
    )

    args = parser.parse_args()

    # Setup logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
        handlers=[logging.StreamHandler()],
    )

    config = build_config(args)
    errors = config.validate_config()
    if errors:
        for error in errors:
            logger.error(f"Invalid configuration: {error}")
        sys.exit(1)

    try:
        matches = run(config)
    except LoadError as e:
        logger.error(f"Could not load inputs: {e}")
        sys.exit(1)

    print_summary(matches, config)


if __name__ == "__main__":
    main()
