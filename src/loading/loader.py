"""
Table loading for the benchmark matcher.

Reads the five flat input tables (benchmarks, thresholdless pollutants,
pollutant registry, pollutant synonyms, benchmark synonyms) into all-string
pandas DataFrames with canonical column names.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple, Union

import pandas as pd

from src.matching.types import (
    BENCHMARK_NAME,
    CAS_NUMBER,
    CEDEN_NAME,
    PUBCHEM_SYNONYM,
    SourceTables,
)
from src.normalization.text_normalizer import TextNormalizer
from src.utils.config_manager import TABLE_NAMES, ConfigManager

logger = logging.getLogger(__name__)

TableSource = Union[str, Path, pd.DataFrame]


class LoadError(Exception):
    """Raised when an input table is missing, unparseable, or lacks a required column."""

    pass


@dataclass(frozen=True)
class TableSpec:
    """
    Shape of one input table after loading.

    Attributes:
        name: Table name used in configuration and messages
        key: Column identifying the row's entity; rows missing it are dropped
        required: Canonical columns that must exist after renaming
        keep_only: If set, every other column is discarded
        dedupe: Drop duplicate rows after projection
    """
    name: str
    key: str
    required: Tuple[str, ...]
    keep_only: bool = False
    dedupe: bool = False


TABLE_SPECS = {
    'benchmarks': TableSpec('benchmarks', BENCHMARK_NAME, (BENCHMARK_NAME, CAS_NUMBER)),
    # Source list repeats "Hydroxycarbofuran, 3-"
    'thresholdless': TableSpec('thresholdless', CEDEN_NAME, (CEDEN_NAME,), keep_only=True, dedupe=True),
    'pollutants': TableSpec('pollutants', CEDEN_NAME, (CEDEN_NAME, CAS_NUMBER)),
    'pollutant_synonyms': TableSpec(
        'pollutant_synonyms', CEDEN_NAME, (CEDEN_NAME, PUBCHEM_SYNONYM), keep_only=True
    ),
    'benchmark_synonyms': TableSpec(
        'benchmark_synonyms', BENCHMARK_NAME, (BENCHMARK_NAME, PUBCHEM_SYNONYM), keep_only=True
    ),
}


class TableLoader:
    """
    Loads and normalizes the input tables of a matching run.

    Every cell is kept as a string, including CAS numbers, which may carry
    leading zeros or hyphens. Only the configured NA markers ("" and "NA"
    by default) are read as missing.
    """

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        normalizer: Optional[TextNormalizer] = None,
    ):
        """
        Initialize the loader.

        Args:
            config: ConfigManager (defaults used if None)
            normalizer: TextNormalizer for cell trimming (creates new if None)
        """
        self.config = config or ConfigManager()
        self.normalizer = normalizer or TextNormalizer()

    def read_csv(self, path: Path) -> pd.DataFrame:
        """
        Read a CSV file with every column typed as string.

        Args:
            path: CSV file path

        Returns:
            Raw DataFrame with source column names

        Raises:
            LoadError: If the file is missing or cannot be parsed
        """
        path = Path(path)
        if not path.exists():
            raise LoadError(f"Input file not found: {path}")

        try:
            frame = pd.read_csv(
                path,
                dtype=str,
                keep_default_na=False,
                na_values=self.config.get_reading_param('na_values'),
                encoding=self.config.get_reading_param('encoding'),
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            raise LoadError(f"Could not parse {path}: {exc}") from exc
        except OSError as exc:
            raise LoadError(f"Could not read {path}: {exc}") from exc

        logger.info(f"Loaded {len(frame)} rows, {len(frame.columns)} columns from {path}")
        return frame

    def _as_string_frame(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Copy an in-memory DataFrame with every present cell converted to str."""
        frame = frame.copy()
        frame.columns = [str(column) for column in frame.columns]
        if frame.empty:
            return frame.astype(object)
        return frame.astype(object).map(str, na_action='ignore')

    def load_table(self, name: str, source: TableSource) -> pd.DataFrame:
        """
        Load one input table and bring it into canonical shape.

        Steps: read (or copy) the source, rename source columns, check the
        required columns, trim cells, turn NA markers into missing values
        (so blank cells are missing), drop rows without a key name, project
        and deduplicate where the table's TableSpec asks for it.

        Args:
            name: Table name (one of TABLE_NAMES)
            source: CSV path or DataFrame

        Returns:
            Normalized DataFrame

        Raises:
            LoadError: If the source cannot be read or a required column is absent
            KeyError: If the table name is unknown
        """
        spec = TABLE_SPECS[name]

        if isinstance(source, pd.DataFrame):
            frame = self._as_string_frame(source)
        else:
            frame = self.read_csv(Path(source))

        renames = self.config.get_column_map(name)
        frame = frame.rename(columns=renames)

        missing = [column for column in spec.required if column not in frame.columns]
        if missing:
            raise LoadError(
                f"Table '{name}' is missing required column(s) {', '.join(missing)}.\n"
                f"Available columns: {', '.join(map(str, frame.columns))}"
            )

        if self.config.get_reading_param('trim_whitespace'):
            frame = self.normalizer.strip_frame(frame)
        frame = self.normalizer.blank_markers(frame, self.config.get_reading_param('na_values'))

        keyless = frame[spec.key].isna()
        if keyless.any():
            logger.warning(f"Dropping {int(keyless.sum())} row(s) without {spec.key} from '{name}'")
            frame = frame[~keyless]

        if spec.keep_only:
            frame = frame[list(spec.required)]

        if spec.dedupe:
            before = len(frame)
            frame = frame.drop_duplicates()
            dropped = before - len(frame)
            if dropped:
                logger.info(f"Dropped {dropped} duplicate row(s) from '{name}'")

        return frame.reset_index(drop=True)

    def load_all(self, sources: Optional[Mapping[str, TableSource]] = None) -> SourceTables:
        """
        Load all five input tables.

        Args:
            sources: Table name -> path or DataFrame. Tables not given are
                read from the paths in configuration.

        Returns:
            SourceTables with every table normalized

        Raises:
            LoadError: If any table fails to load
        """
        sources = dict(sources or {})
        tables = {}
        for name in TABLE_NAMES:
            source = sources.get(name)
            if source is None:
                source = self.config.get_input_path(name)
            tables[name] = self.load_table(name, source)

        duplicated = tables['pollutants'][CEDEN_NAME].duplicated()
        if duplicated.any():
            logger.warning(
                f"Pollutant registry repeats {int(duplicated.sum())} name(s); "
                f"exact matches for those pollutants will repeat"
            )

        return SourceTables(**tables)
