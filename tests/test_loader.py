"""
Tests for table loading.

Tests:
- Source column renames and projections
- Thresholdless duplicate removal
- String typing of every cell (CAS leading zeros, sentinels)
- NA markers and whitespace trimming
- LoadError for missing files, empty files, and missing columns
"""

import pandas as pd
import pytest

from src.loading.loader import TABLE_SPECS, LoadError, TableLoader
from src.matching.types import SourceTables
from src.normalization.text_normalizer import NBSP
from tests.fixtures.test_data import INPUT_FILE_NAMES


# ============================================================================
# IN-MEMORY SOURCES
# ============================================================================

class TestLoadTable:
    """Tests for TableLoader.load_table with DataFrame sources."""

    def test_benchmark_renames(self, default_config, raw_frames):
        """Test Pesticide/CAS number renames; other columns pass through."""
        benchmarks = TableLoader(default_config).load_table('benchmarks', raw_frames['benchmarks'])
        assert list(benchmarks.columns) == ['benchmark_name', 'cas_number', 'Year Updated', 'Fish Acute']
        assert len(benchmarks) == 7

    def test_thresholdless_projection_and_dedupe(self, default_config, raw_frames):
        """Test that only ceden_name is kept and the repeated name collapses."""
        thresholdless = TableLoader(default_config).load_table('thresholdless', raw_frames['thresholdless'])
        assert list(thresholdless.columns) == ['ceden_name']
        assert len(thresholdless) == 7
        assert (thresholdless['ceden_name'] == "Hydroxycarbofuran, 3-").sum() == 1

    def test_pollutant_renames(self, default_config, raw_frames):
        """Test AnalyteName/CASNumber renames."""
        pollutants = TableLoader(default_config).load_table('pollutants', raw_frames['pollutants'])
        assert list(pollutants.columns) == ['ceden_name', 'cas_number']
        assert pollutants.loc[pollutants['ceden_name'] == 'CompoundX', 'cas_number'].iloc[0] == "0"

    def test_synonym_tables_projected(self, default_config):
        """Test that synonym tables keep only owner and synonym columns."""
        frame = pd.DataFrame(
            {'ceden_name': ['Diazinon'], 'pubchem_synonym': ['Basudin'], 'cid': ['3017']}
        )
        edges = TableLoader(default_config).load_table('pollutant_synonyms', frame)
        assert list(edges.columns) == ['ceden_name', 'pubchem_synonym']

    def test_non_string_cells_become_strings(self, default_config):
        """Test that numeric cells from in-memory frames are stringified."""
        frame = pd.DataFrame({'AnalyteName': ['Carbaryl'], 'CASNumber': [63252]})
        pollutants = TableLoader(default_config).load_table('pollutants', frame)
        assert pollutants['cas_number'].iloc[0] == "63252"

    def test_trims_whitespace(self, default_config):
        """Test that spaces and tabs around names are trimmed."""
        frame = pd.DataFrame({'Pesticide': ["  Diazinon\t"], 'CAS number': [" 333-41-5 "]})
        benchmarks = TableLoader(default_config).load_table('benchmarks', frame)
        assert benchmarks['benchmark_name'].iloc[0] == "Diazinon"
        assert benchmarks['cas_number'].iloc[0] == "333-41-5"

    def test_trimming_can_be_disabled(self, default_config):
        """Test the trim_whitespace switch."""
        default_config.config['reading']['trim_whitespace'] = False
        frame = pd.DataFrame({'Pesticide': [" Diazinon "], 'CAS number': ["333-41-5"]})
        benchmarks = TableLoader(default_config).load_table('benchmarks', frame)
        assert benchmarks['benchmark_name'].iloc[0] == " Diazinon "

    def test_nbsp_survives_loading(self, default_config, raw_frames):
        """Test that NBSP cells reach the matcher untouched."""
        benchmarks = TableLoader(default_config).load_table('benchmarks', raw_frames['benchmarks'])
        bifenthrin = benchmarks[benchmarks['benchmark_name'] == 'Bifenthrin']
        assert bifenthrin['Fish Acute'].iloc[0] == NBSP

    def test_drops_rows_without_key(self, default_config):
        """Test that rows missing the key name are dropped."""
        frame = pd.DataFrame({'Pesticide': ["Diazinon", None], 'CAS number': ["333-41-5", "63-25-2"]})
        benchmarks = TableLoader(default_config).load_table('benchmarks', frame)
        assert benchmarks['benchmark_name'].tolist() == ["Diazinon"]

    def test_missing_required_column(self, default_config):
        """Test LoadError naming the missing column and the available ones."""
        frame = pd.DataFrame({'Pesticide': ["Diazinon"], 'CAS': ["333-41-5"]})
        with pytest.raises(LoadError) as exc_info:
            TableLoader(default_config).load_table('benchmarks', frame)
        message = str(exc_info.value)
        assert "cas_number" in message
        assert "CAS" in message

    def test_unknown_table(self, default_config):
        """Test that unknown table names raise KeyError."""
        with pytest.raises(KeyError):
            TableLoader(default_config).load_table('thresholds', pd.DataFrame())

    def test_table_specs_cover_all_tables(self):
        """Test that every configured table has a load spec."""
        assert set(TABLE_SPECS) == {
            'benchmarks', 'thresholdless', 'pollutants', 'pollutant_synonyms', 'benchmark_synonyms'
        }


# ============================================================================
# CSV SOURCES
# ============================================================================

class TestReadCsv:
    """Tests for CSV reading."""

    def test_load_all_from_configured_paths(self, default_config, input_dir):
        """Test loading every table from the input directory."""
        tables = TableLoader(default_config).load_all()
        assert isinstance(tables, SourceTables)
        assert tables.row_counts() == {
            'benchmarks': 7,
            'thresholdless': 7,
            'pollutants': 8,
            'pollutant_synonyms': 7,
            'benchmark_synonyms': 6,
        }

    def test_csv_matches_in_memory_load(self, default_config, input_dir, source_tables):
        """Test that CSV and DataFrame sources load identically."""
        from_csv = TableLoader(default_config).load_all()
        pd.testing.assert_frame_equal(from_csv.benchmarks, source_tables.benchmarks, check_dtype=False)
        pd.testing.assert_frame_equal(from_csv.thresholdless, source_tables.thresholdless, check_dtype=False)

    def test_cas_read_as_string(self, default_config, temp_dir):
        """Test that CAS numbers keep leading zeros and sentinels stay strings."""
        path = temp_dir / "ceden.csv"
        path.write_text("AnalyteName,CASNumber\nFormaldehyde,0050000\nUnknown,0\n", encoding="utf-8")
        pollutants = TableLoader(default_config).load_table('pollutants', path)
        assert pollutants['cas_number'].tolist() == ["0050000", "0"]

    def test_na_markers(self, default_config, temp_dir):
        """Test that only empty and "NA" cells are missing."""
        path = temp_dir / "ceden.csv"
        path.write_text(
            "AnalyteName,CASNumber\nA,\nB,NA\nC,N/A\nD,NR\n", encoding="utf-8"
        )
        pollutants = TableLoader(default_config).load_table('pollutants', path)
        assert pollutants['cas_number'].isna().tolist() == [True, True, False, False]
        assert pollutants['cas_number'].iloc[2] == "N/A"

    def test_quoted_name_with_comma(self, default_config, temp_dir):
        """Test that quoted names containing commas are one cell."""
        path = temp_dir / "thresholdless.csv"
        path.write_text('ANALYTE_NAME\n"Hydroxycarbofuran, 3-"\n', encoding="utf-8")
        thresholdless = TableLoader(default_config).load_table('thresholdless', path)
        assert thresholdless['ceden_name'].tolist() == ["Hydroxycarbofuran, 3-"]

    def test_missing_file(self, default_config, temp_dir):
        """Test LoadError for a missing input file."""
        with pytest.raises(LoadError, match="not found"):
            TableLoader(default_config).load_table('benchmarks', temp_dir / "missing.csv")

    def test_empty_file(self, default_config, temp_dir):
        """Test LoadError for an empty input file."""
        path = temp_dir / "benchmarks.csv"
        path.write_text("", encoding="utf-8")
        with pytest.raises(LoadError, match="Could not parse"):
            TableLoader(default_config).load_table('benchmarks', path)

    def test_load_all_fails_on_any_table(self, default_config, input_dir):
        """Test that one missing table fails the whole load."""
        (input_dir / INPUT_FILE_NAMES['benchmark_synonyms']).unlink()
        with pytest.raises(LoadError):
            TableLoader(default_config).load_all()

    def test_sources_override_config(self, default_config, input_dir, raw_frames):
        """Test that explicit sources take precedence over configured paths."""
        benchmarks = raw_frames['benchmarks'].head(2)
        tables = TableLoader(default_config).load_all({'benchmarks': benchmarks})
        assert len(tables.benchmarks) == 2
        assert len(tables.pollutants) == 8


# ============================================================================
# BLANK CELLS
# ============================================================================

class TestBlankCells:
    """Tests for cells that hold only whitespace."""

    def test_blank_cas_in_csv_is_missing(self, default_config, temp_dir):
        """Test that a CAS cell of spaces reads as missing, not as ''."""
        path = temp_dir / "ceden.csv"
        path.write_text("AnalyteName,CASNumber\nPollA, \nPollB,\t\n", encoding="utf-8")
        pollutants = TableLoader(default_config).load_table('pollutants', path)
        assert pollutants['cas_number'].isna().all()

    def test_blank_key_in_csv_dropped(self, default_config, temp_dir):
        """Test that a row whose name is only spaces is dropped."""
        path = temp_dir / "benchmarks.csv"
        path.write_text("Pesticide,CAS number\n  ,333-41-5\nDiazinon,333-41-5\n", encoding="utf-8")
        benchmarks = TableLoader(default_config).load_table('benchmarks', path)
        assert benchmarks['benchmark_name'].tolist() == ["Diazinon"]

    def test_blank_synonym_in_csv_is_missing(self, default_config, temp_dir):
        """Test that a synonym of spaces reads as missing."""
        path = temp_dir / "ceden-synonyms.csv"
        path.write_text("ceden_name,pubchem_synonym\nPollB, \n", encoding="utf-8")
        synonyms = TableLoader(default_config).load_table('pollutant_synonyms', path)
        assert synonyms['pubchem_synonym'].isna().all()

    def test_markers_apply_to_frames(self, default_config):
        """Test that in-memory sources get the same NA markers as CSV files."""
        frame = pd.DataFrame(
            {'AnalyteName': ["A", "B", "C", "D", " "], 'CASNumber': ["", "NA", " ", "0", "63-25-2"]},
            dtype=object,
        )
        pollutants = TableLoader(default_config).load_table('pollutants', frame)
        assert pollutants['ceden_name'].tolist() == ["A", "B", "C", "D"]
        assert pollutants['cas_number'].isna().tolist() == [True, True, True, False]

    def test_blank_kept_when_trimming_disabled(self, default_config):
        """Test that without trimming only exact markers are missing."""
        default_config.config['reading']['trim_whitespace'] = False
        frame = pd.DataFrame({'AnalyteName': ["A", "B"], 'CASNumber': [" ", ""]}, dtype=object)
        pollutants = TableLoader(default_config).load_table('pollutants', frame)
        assert pollutants['cas_number'].iloc[0] == " "
        assert pd.isna(pollutants['cas_number'].iloc[1])
