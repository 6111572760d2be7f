"""
Exact matching module for thresholdless pollutants.

Matches thresholdless pollutants to benchmarks through shared CAS numbers,
returning matches tagged with exact confidence.
"""

import logging
from typing import Optional

import pandas as pd

from src.matching.types import CAS_NUMBER, CEDEN_NAME, order_columns
from src.normalization.cas_normalizer import CASNormalizer

logger = logging.getLogger(__name__)


class ExactMatcher:
    """
    Exact matching engine for thresholdless pollutants.

    Thresholdless pollutant names carry no CAS number, so they are first
    joined to the full CEDEN registry to recover one. Registry rows marked
    with the pollutant sentinel ("0") and benchmark rows marked with the
    benchmark sentinel ("NR") never match.
    """

    def __init__(
        self,
        cas_normalizer: Optional[CASNormalizer] = None,
        pollutant_sentinel: str = '0',
        benchmark_sentinel: str = 'NR',
    ):
        """
        Initialize the exact matcher.

        Args:
            cas_normalizer: CASNormalizer instance (creates new if None)
            pollutant_sentinel: Registry value meaning "no CAS number"
            benchmark_sentinel: Benchmark value meaning "CAS not reported"
        """
        self.cas_normalizer = cas_normalizer or CASNormalizer()
        self.pollutant_sentinel = pollutant_sentinel
        self.benchmark_sentinel = benchmark_sentinel

    def prepare_benchmarks(self, benchmarks: pd.DataFrame) -> pd.DataFrame:
        """
        Drop benchmarks without a CAS number and strip hyphens from the rest.

        The result is also the benchmark pool of the synonym pass.

        Args:
            benchmarks: Benchmark table as loaded

        Returns:
            New benchmark table with normalized CAS numbers
        """
        reported = self.cas_normalizer.reported_mask(benchmarks[CAS_NUMBER], self.benchmark_sentinel)
        prepared = benchmarks[reported].copy()
        prepared[CAS_NUMBER] = self.cas_normalizer.normalize_series(prepared[CAS_NUMBER])

        logger.info(f"Benchmarks with CAS numbers: {len(prepared)} of {len(benchmarks)}")
        self._log_invalid(prepared, 'benchmark', self.benchmark_sentinel)
        return prepared.reset_index(drop=True)

    def recover_cas(self, thresholdless: pd.DataFrame, pollutants: pd.DataFrame) -> pd.DataFrame:
        """
        Attach registry CAS numbers to thresholdless pollutant names.

        Args:
            thresholdless: Thresholdless pollutant names
            pollutants: Full CEDEN pollutant registry

        Returns:
            (ceden_name, cas_number) rows with usable, normalized CAS numbers
        """
        joined = thresholdless[[CEDEN_NAME]].merge(pollutants, on=CEDEN_NAME, how='inner')
        reported = self.cas_normalizer.reported_mask(joined[CAS_NUMBER], self.pollutant_sentinel)
        with_cas = joined.loc[reported, [CEDEN_NAME, CAS_NUMBER]].copy()
        with_cas[CAS_NUMBER] = self.cas_normalizer.normalize_series(with_cas[CAS_NUMBER])

        logger.info(
            f"Thresholdless pollutants with CAS numbers: {len(with_cas)} "
            f"({len(thresholdless)} names, {len(joined)} found in registry)"
        )
        self._log_invalid(with_cas, 'pollutant', self.pollutant_sentinel)
        return with_cas.reset_index(drop=True)

    def match(
        self,
        thresholdless: pd.DataFrame,
        pollutants: pd.DataFrame,
        prepared_benchmarks: pd.DataFrame,
    ) -> pd.DataFrame:
        """
        Match thresholdless pollutants to benchmarks by CAS number.

        Args:
            thresholdless: Thresholdless pollutant names
            pollutants: Full CEDEN pollutant registry
            prepared_benchmarks: Output of prepare_benchmarks()

        Returns:
            Match rows ordered (ceden_name, benchmark_name, cas_number, ...)
        """
        with_cas = self.recover_cas(thresholdless, pollutants)
        matches = with_cas.merge(prepared_benchmarks, on=CAS_NUMBER, how='inner')
        matches = order_columns(matches).reset_index(drop=True)

        logger.info(f"Exact CAS matches: {len(matches)}")
        return matches

    def _log_invalid(self, frame: pd.DataFrame, side: str, sentinel: str) -> None:
        invalid = self.cas_normalizer.count_invalid(frame[CAS_NUMBER], sentinel)
        if invalid:
            logger.warning(f"{invalid} {side} CAS number(s) fail check-digit validation")
