"""
Synonym matching module for thresholdless pollutants.

Finds *potential* benchmarks for pollutants left unmatched by CAS number,
using the synonym bridge. Results narrow the search space for a reviewer;
they are not asserted to be correct.
"""

import logging

import pandas as pd

from src.matching.types import BENCHMARK_NAME, CEDEN_NAME, PUBCHEM_SYNONYM, order_columns

logger = logging.getLogger(__name__)


class SynonymMatcher:
    """
    Candidate matching of remaining pollutants and benchmarks via shared synonyms.

    Pollutants and benchmarks already present in the exact match table are
    removed from the candidate pools independently, by name.
    """

    def remaining_benchmarks(
        self,
        prepared_benchmarks: pd.DataFrame,
        bridge: pd.DataFrame,
        exact_matches: pd.DataFrame,
    ) -> pd.DataFrame:
        """
        Benchmarks not matched by CAS, expanded with their bridge synonyms.

        Args:
            prepared_benchmarks: Benchmarks after CAS cleanup
            bridge: Synonym bridge (ceden_name, pubchem_synonym, benchmark_name)
            exact_matches: Exact match table

        Returns:
            Benchmark rows joined to pubchem_synonym, without the bridge's ceden_name
        """
        unmatched = ~prepared_benchmarks[BENCHMARK_NAME].isin(exact_matches[BENCHMARK_NAME])
        remaining = prepared_benchmarks[unmatched]
        expanded = remaining.merge(bridge.drop(columns=[CEDEN_NAME]), on=BENCHMARK_NAME, how='inner')

        logger.debug(f"Remaining benchmarks: {len(remaining)} -> {len(expanded)} synonym rows")
        return expanded

    def remaining_pollutants(
        self,
        thresholdless: pd.DataFrame,
        bridge: pd.DataFrame,
        exact_matches: pd.DataFrame,
    ) -> pd.DataFrame:
        """
        Thresholdless pollutants not matched by CAS, expanded with their bridge synonyms.

        Args:
            thresholdless: Thresholdless pollutant names
            bridge: Synonym bridge
            exact_matches: Exact match table

        Returns:
            (ceden_name, pubchem_synonym) rows, without the bridge's benchmark_name
        """
        unmatched = ~thresholdless[CEDEN_NAME].isin(exact_matches[CEDEN_NAME])
        remaining = thresholdless[unmatched]
        expanded = remaining.merge(bridge.drop(columns=[BENCHMARK_NAME]), on=CEDEN_NAME, how='inner')

        logger.debug(f"Remaining pollutants: {len(remaining)} -> {len(expanded)} synonym rows")
        return expanded

    def match(
        self,
        thresholdless: pd.DataFrame,
        bridge: pd.DataFrame,
        prepared_benchmarks: pd.DataFrame,
        exact_matches: pd.DataFrame,
    ) -> pd.DataFrame:
        """
        Match remaining pollutants to remaining benchmarks through shared synonyms.

        Pairs linked by several synonyms collapse to one row once the synonym
        column is dropped.

        Args:
            thresholdless: Thresholdless pollutant names
            bridge: Synonym bridge
            prepared_benchmarks: Benchmarks after CAS cleanup
            exact_matches: Exact match table (exclusion set)

        Returns:
            Candidate match rows ordered (ceden_name, benchmark_name, ...)
        """
        benchmarks = self.remaining_benchmarks(prepared_benchmarks, bridge, exact_matches)
        pollutants = self.remaining_pollutants(thresholdless, bridge, exact_matches)

        candidates = pollutants.merge(benchmarks, on=PUBCHEM_SYNONYM, how='inner')
        candidates = candidates.drop(columns=[PUBCHEM_SYNONYM]).drop_duplicates()
        candidates = order_columns(candidates).reset_index(drop=True)

        logger.info(f"Potential synonym matches: {len(candidates)} (review required)")
        return candidates
