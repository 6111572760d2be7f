"""
Type definitions for the benchmark matching pipeline.

Defines the canonical column names, the confidence tags attached to each
result table, and the container for the five loaded source tables.
"""

from dataclasses import dataclass
from enum import Enum

import pandas as pd

# Canonical column names shared by every stage
CEDEN_NAME = 'ceden_name'
BENCHMARK_NAME = 'benchmark_name'
CAS_NUMBER = 'cas_number'
PUBCHEM_SYNONYM = 'pubchem_synonym'

LEADING_COLUMNS = (CEDEN_NAME, BENCHMARK_NAME)


class MatchConfidence(Enum):
    """Confidence tag of a result table."""
    EXACT = "exact"  # shared normalized CAS number
    POTENTIAL = "potential"  # shared synonym, needs human review


class MatchMethod(Enum):
    """Methods used for matching pollutants to benchmarks."""
    CAS = "cas"
    SYNONYM = "synonym"

    @property
    def confidence(self) -> MatchConfidence:
        """Get the confidence tag for results produced by this method."""
        if self is MatchMethod.CAS:
            return MatchConfidence.EXACT
        return MatchConfidence.POTENTIAL


@dataclass(frozen=True)
class SourceTables:
    """
    The five normalized input tables of a run.

    All cells are strings or missing values; column names are canonical.
    """
    benchmarks: pd.DataFrame
    thresholdless: pd.DataFrame
    pollutants: pd.DataFrame
    pollutant_synonyms: pd.DataFrame
    benchmark_synonyms: pd.DataFrame

    def row_counts(self) -> dict[str, int]:
        """Row count of each table, keyed by table name."""
        return {
            'benchmarks': len(self.benchmarks),
            'thresholdless': len(self.thresholdless),
            'pollutants': len(self.pollutants),
            'pollutant_synonyms': len(self.pollutant_synonyms),
            'benchmark_synonyms': len(self.benchmark_synonyms),
        }


def order_columns(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Put ``ceden_name`` and ``benchmark_name`` first, keeping the rest in order.

    Args:
        frame: Match table containing both name columns

    Returns:
        Reordered copy of the table
    """
    rest = [column for column in frame.columns if column not in LEADING_COLUMNS]
    return frame[list(LEADING_COLUMNS) + rest]
