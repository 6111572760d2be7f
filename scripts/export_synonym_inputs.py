"""
Export name lists for the PubChem Identifier Exchange Service.

Writes the complete CEDEN pollutant name list and the benchmark name list,
one name per line. These are the inputs used to regenerate
input/ceden-synonyms.csv and input/benchmarks-synonyms.csv:

    1. Open https://pubchem.ncbi.nlm.nih.gov/idexchange/idexchange.cgi
    2. Input ID List: "Synonyms", browse to the exported name list
    3. Operator Type: "Same CID"
    4. Output IDs: "Synonyms"
    5. Output Method: "Two column file showing each input-output correspondence"
    6. Submit, download, and save with columns
       ceden_name,pubchem_synonym (or benchmark_name,pubchem_synonym)

The complete pollutant list is used rather than the thresholdless list so
the same synonym file serves threshold update reviews.

Usage:
    python scripts/export_synonym_inputs.py
    python scripts/export_synonym_inputs.py --config config/benchmark_config.yaml --log-file logs/export.log
"""
import argparse
import sys
from datetime import datetime
from pathlib import Path

from loguru import logger

# Add src to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.loading.loader import LoadError, TableLoader
from src.matching.types import BENCHMARK_NAME, CEDEN_NAME
from src.reporting.writer import write_name_list
from src.utils.config_manager import ConfigManager


def setup_logging(log_file: Path = None):
    """Configure logging."""
    logger.remove()  # Remove default handler

    # Console handler with INFO level
    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level="INFO",
    )

    # File handler with DEBUG level
    if log_file is None:
        log_file = PROJECT_ROOT / "logs" / f"export_synonym_inputs_{datetime.now():%Y%m%d_%H%M%S}.log"

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}",
        level="DEBUG",
        rotation="10 MB",
    )

    logger.info(f"Logging to {log_file}")


def export_name_lists(config: ConfigManager) -> dict:
    """
    Export the pollutant and benchmark name lists.

    Args:
        config: Run configuration

    Returns:
        Mapping of list name to written path
    """
    loader = TableLoader(config)

    pollutants = loader.load_table('pollutants', config.get_input_path('pollutants'))
    benchmarks = loader.load_table('benchmarks', config.get_input_path('benchmarks'))
    logger.debug(f"Loaded {len(pollutants)} pollutants and {len(benchmarks)} benchmarks")

    written = {
        'pollutant_names': write_name_list(
            pollutants, CEDEN_NAME, config.get_output_path('pollutant_names')
        ),
        'benchmark_names': write_name_list(
            benchmarks, BENCHMARK_NAME, config.get_output_path('benchmark_names')
        ),
    }
    for name, path in written.items():
        logger.info(f"{name}: {path}")

    return written


def main():
    parser = argparse.ArgumentParser(
        description="Export pollutant and benchmark name lists for PubChem synonym lookup"
    )
    parser.add_argument(
        "--config", "-c", type=str,
        default=str(PROJECT_ROOT / "config" / "benchmark_config.yaml"),
        help="YAML configuration file",
    )
    parser.add_argument(
        "--log-file", type=str, default=None,
        help="Log file path (default: logs/export_synonym_inputs_<timestamp>.log)",
    )
    args = parser.parse_args()

    setup_logging(Path(args.log_file) if args.log_file else None)

    config = ConfigManager(Path(args.config), base_path=PROJECT_ROOT)
    try:
        export_name_lists(config)
    except LoadError as e:
        logger.error(f"Could not load inputs: {e}")
        sys.exit(1)

    logger.success("Name lists ready for the PubChem Identifier Exchange Service")


if __name__ == "__main__":
    main()
