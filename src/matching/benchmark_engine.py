"""
Benchmark engine for thresholdless pollutant matching.

Runs the two matching passes over the loaded source tables:

  Step 1: Synonym bridge (reflexive synonym edges on both sides, joined on text)
  Step 2: Benchmark CAS cleanup (drop "NR", strip hyphens)
  Step 3: Exact matching by CAS number
  Step 4: Synonym matching of everything Step 3 left unmatched
"""

import logging
import time
from typing import Optional

from src.matching.exact_matcher import ExactMatcher
from src.matching.match_result import BenchmarkMatches
from src.matching.synonym_joiner import SynonymJoiner
from src.matching.synonym_matcher import SynonymMatcher
from src.matching.types import SourceTables
from src.normalization.cas_normalizer import CASNormalizer

logger = logging.getLogger(__name__)


class BenchmarkEngine:
    """
    Two-pass matching engine: exact CAS matches first, synonym candidates second.

    The exact match table doubles as the exclusion set of the synonym pass,
    so a pollutant or benchmark matched by CAS never reappears as a candidate.
    """

    def __init__(
        self,
        cas_normalizer: Optional[CASNormalizer] = None,
        synonym_joiner: Optional[SynonymJoiner] = None,
        exact_matcher: Optional[ExactMatcher] = None,
        synonym_matcher: Optional[SynonymMatcher] = None,
    ):
        """
        Initialize the benchmark engine.

        Args:
            cas_normalizer: CASNormalizer instance (creates new if None)
            synonym_joiner: SynonymJoiner instance (creates new if None)
            exact_matcher: ExactMatcher instance (creates new if None)
            synonym_matcher: SynonymMatcher instance (creates new if None)
        """
        self.cas_normalizer = cas_normalizer or CASNormalizer()
        self.synonym_joiner = synonym_joiner or SynonymJoiner()
        self.exact_matcher = exact_matcher or ExactMatcher(self.cas_normalizer)
        self.synonym_matcher = synonym_matcher or SynonymMatcher()

    def run(self, tables: SourceTables) -> BenchmarkMatches:
        """
        Match thresholdless pollutants to benchmarks.

        Args:
            tables: Normalized source tables

        Returns:
            BenchmarkMatches holding the exact and potential match tables
        """
        start = time.time()
        logger.info(f"Matching {len(tables.thresholdless)} thresholdless pollutants "
                    f"against {len(tables.benchmarks)} benchmarks")

        bridge = self.synonym_joiner.build_bridge(tables.pollutant_synonyms, tables.benchmark_synonyms)
        benchmarks = self.exact_matcher.prepare_benchmarks(tables.benchmarks)

        by_cas = self.exact_matcher.match(tables.thresholdless, tables.pollutants, benchmarks)
        by_synonym = self.synonym_matcher.match(tables.thresholdless, bridge, benchmarks, by_cas)

        elapsed_ms = (time.time() - start) * 1000
        logger.info(
            f"Matching complete in {elapsed_ms:.1f} ms: "
            f"{len(by_cas)} exact, {len(by_synonym)} potential"
        )

        return BenchmarkMatches(
            by_cas=by_cas,
            by_synonym=by_synonym,
            input_counts=tables.row_counts(),
            bridge_rows=len(bridge),
        )
