"""
Data structures for matching results.

Defines the output of a benchmark matching run: the exact (CAS) match table,
the potential (synonym) match table, and the run statistics reported to
reviewers.
"""

from dataclasses import dataclass, field
from typing import Dict

import pandas as pd

from src.matching.types import BENCHMARK_NAME, CEDEN_NAME, MatchConfidence, MatchMethod

MATCH_CONFIDENCE_COLUMN = 'match_confidence'


@dataclass(frozen=True)
class BenchmarkMatches:
    """
    Complete result of a benchmark matching run.

    Attributes:
        by_cas: Exact matches, one row per pollutant/benchmark pair sharing a CAS number
        by_synonym: Candidate matches sharing a synonym; every row needs human review
        input_counts: Row count of each source table after loading
        bridge_rows: Number of (pollutant, synonym, benchmark) rows in the synonym bridge
    """
    by_cas: pd.DataFrame
    by_synonym: pd.DataFrame
    input_counts: Dict[str, int] = field(default_factory=dict)
    bridge_rows: int = 0

    def table(self, method: MatchMethod) -> pd.DataFrame:
        """Get the result table produced by a matching method."""
        if method is MatchMethod.CAS:
            return self.by_cas
        return self.by_synonym

    @property
    def exact_count(self) -> int:
        """Number of exact match rows."""
        return len(self.by_cas)

    @property
    def potential_count(self) -> int:
        """Number of candidate match rows awaiting review."""
        return len(self.by_synonym)

    @property
    def matched_pollutants(self) -> set:
        """Distinct pollutant names with at least one exact or potential match."""
        return set(self.by_cas[CEDEN_NAME]) | set(self.by_synonym[CEDEN_NAME])

    def pairs(self, method: MatchMethod) -> set:
        """Distinct (ceden_name, benchmark_name) pairs of one result table."""
        frame = self.table(method)
        return set(zip(frame[CEDEN_NAME], frame[BENCHMARK_NAME]))

    def to_review_frame(self) -> pd.DataFrame:
        """
        Stack both tables into one frame tagged with ``match_confidence``.

        Exact rows come first. Columns present in only one table are left
        missing in the other's rows.

        Returns:
            Combined review table with the tag as third column
        """
        frames = []
        for method in (MatchMethod.CAS, MatchMethod.SYNONYM):
            frame = self.table(method).copy()
            frame.insert(2, MATCH_CONFIDENCE_COLUMN, method.confidence.value)
            frames.append(frame)
        return pd.concat(frames, ignore_index=True, sort=False)

    def summary(self) -> Dict[str, object]:
        """Run statistics for logs and the review workbook."""
        return {
            **{f"{name}_rows": count for name, count in self.input_counts.items()},
            'synonym_bridge_rows': self.bridge_rows,
            f"{MatchConfidence.EXACT.value}_matches": self.exact_count,
            f"{MatchConfidence.POTENTIAL.value}_matches": self.potential_count,
            'pollutants_with_matches': len(self.matched_pollutants),
        }
