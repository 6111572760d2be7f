"""
Thresholdless pollutant matching package.

Provides two-pass matching of CEDEN pollutants to USEPA benchmarks:
- Exact matching (shared normalized CAS numbers)
- Synonym matching (shared PubChem synonyms, candidates for review)

The benchmark engine runs both passes and uses the exact matches to
exclude pollutants and benchmarks from the synonym pass.
"""

import logging
from typing import Optional

from src.matching.match_result import BenchmarkMatches
from src.matching.exact_matcher import ExactMatcher
from src.matching.synonym_joiner import JoinAmbiguityWarning, SynonymJoiner, build_synonym_bridge
from src.matching.synonym_matcher import SynonymMatcher
from src.matching.benchmark_engine import BenchmarkEngine
from src.matching.types import MatchConfidence, MatchMethod, SourceTables
from src.normalization.cas_normalizer import CASNormalizer
from src.utils.config_manager import ConfigManager

_logger = logging.getLogger(__name__)


def build_engine(config: Optional[ConfigManager] = None, **engine_kwargs) -> BenchmarkEngine:
    """
    Build a BenchmarkEngine wired with the configured CAS sentinels.

    Args:
        config: ConfigManager (defaults used if None).
        **engine_kwargs: Extra kwargs forwarded to BenchmarkEngine.

    Returns:
        Fully-wired BenchmarkEngine instance.
    """
    config = config or ConfigManager()
    cas_normalizer = engine_kwargs.pop('cas_normalizer', None) or CASNormalizer()

    pollutant_sentinel = config.get_sentinel('pollutant_cas_absent')
    benchmark_sentinel = config.get_sentinel('benchmark_cas_absent')
    _logger.debug(
        "CAS sentinels: pollutant=%r benchmark=%r", pollutant_sentinel, benchmark_sentinel
    )

    exact_matcher = engine_kwargs.pop('exact_matcher', None) or ExactMatcher(
        cas_normalizer=cas_normalizer,
        pollutant_sentinel=pollutant_sentinel,
        benchmark_sentinel=benchmark_sentinel,
    )

    return BenchmarkEngine(
        cas_normalizer=cas_normalizer,
        exact_matcher=exact_matcher,
        **engine_kwargs,
    )


__all__ = [
    "BenchmarkMatches",
    "ExactMatcher",
    "SynonymJoiner",
    "SynonymMatcher",
    "BenchmarkEngine",
    "JoinAmbiguityWarning",
    "MatchConfidence",
    "MatchMethod",
    "SourceTables",
    "build_synonym_bridge",
    "build_engine",
]
