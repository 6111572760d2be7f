"""
Pytest configuration and shared fixtures for benchmark matcher tests.

Provides:
- Raw source DataFrames in their published column layout
- Loaded (canonical) SourceTables
- CSV input directories written from the raw frames
- Normalizers, matchers, and an engine
- Temporary directories and configuration
"""

import shutil
import tempfile
from pathlib import Path
from typing import Dict, Generator

import pandas as pd
import pytest

from src.loading.loader import TableLoader
from src.matching.benchmark_engine import BenchmarkEngine
from src.matching.exact_matcher import ExactMatcher
from src.matching.synonym_joiner import SynonymJoiner
from src.matching.synonym_matcher import SynonymMatcher
from src.matching.types import SourceTables
from src.normalization.cas_normalizer import CASNormalizer
from src.normalization.text_normalizer import TextNormalizer
from src.utils.config_manager import ConfigManager
from tests.fixtures.test_data import (
    BENCHMARK_COLUMNS,
    BENCHMARK_ROWS,
    BENCHMARK_SYNONYM_ROWS,
    POLLUTANT_COLUMNS,
    POLLUTANT_ROWS,
    POLLUTANT_SYNONYM_ROWS,
    THRESHOLDLESS_COLUMNS,
    THRESHOLDLESS_ROWS,
    edges,
    write_inputs,
)


# ============================================================================
# RAW SOURCE FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def raw_frames() -> Dict[str, pd.DataFrame]:
    """Raw source tables with their published column names."""
    return {
        'benchmarks': pd.DataFrame(BENCHMARK_ROWS, columns=BENCHMARK_COLUMNS, dtype=object),
        'thresholdless': pd.DataFrame(THRESHOLDLESS_ROWS, columns=THRESHOLDLESS_COLUMNS, dtype=object),
        'pollutants': pd.DataFrame(POLLUTANT_ROWS, columns=POLLUTANT_COLUMNS, dtype=object),
        'pollutant_synonyms': edges('ceden_name', POLLUTANT_SYNONYM_ROWS),
        'benchmark_synonyms': edges('benchmark_name', BENCHMARK_SYNONYM_ROWS),
    }


@pytest.fixture(scope="function")
def source_tables(raw_frames, default_config) -> SourceTables:
    """Sample tables after loading and renaming."""
    return TableLoader(default_config).load_all(raw_frames)


# ============================================================================
# TEMPORARY DIRECTORY FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test file operations."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture(scope="function")
def input_dir(temp_dir, raw_frames) -> Path:
    """Temporary input/ directory holding the sample CSV files."""
    return write_inputs(temp_dir / "input", raw_frames)


# ============================================================================
# CONFIGURATION FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def default_config(temp_dir) -> ConfigManager:
    """Default configuration rooted at the temporary directory."""
    return ConfigManager(base_path=temp_dir)


# ============================================================================
# NORMALIZATION FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def text_normalizer() -> TextNormalizer:
    """Fresh text normalizer instance."""
    return TextNormalizer()


@pytest.fixture(scope="function")
def cas_normalizer() -> CASNormalizer:
    """Fresh CAS normalizer instance."""
    return CASNormalizer()


# ============================================================================
# MATCHING FIXTURES
# ============================================================================

@pytest.fixture(scope="function")
def synonym_joiner() -> SynonymJoiner:
    """Fresh synonym joiner instance."""
    return SynonymJoiner()


@pytest.fixture(scope="function")
def exact_matcher(cas_normalizer) -> ExactMatcher:
    """Fresh exact matcher instance with the default sentinels."""
    return ExactMatcher(cas_normalizer=cas_normalizer)


@pytest.fixture(scope="function")
def synonym_matcher() -> SynonymMatcher:
    """Fresh synonym matcher instance."""
    return SynonymMatcher()


@pytest.fixture(scope="function")
def engine(cas_normalizer, synonym_joiner, exact_matcher, synonym_matcher) -> BenchmarkEngine:
    """Fresh benchmark engine."""
    return BenchmarkEngine(
        cas_normalizer=cas_normalizer,
        synonym_joiner=synonym_joiner,
        exact_matcher=exact_matcher,
        synonym_matcher=synonym_matcher,
    )
