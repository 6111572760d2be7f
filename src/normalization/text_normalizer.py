"""
Cell text normalization for tabular chemical data.

Provides the whitespace handling applied when tables are read and the
non-breaking space cleanup applied before match tables are persisted.
The benchmark list is copied from a web page, so some of its cells carry
U+00A0 characters where the page had blank layout cells.
"""

from typing import Any

import pandas as pd

NBSP = "\u00a0"

# Characters trimmed from both ends of a cell on read. NBSP is excluded:
# those cells are blanked on output instead.
TRIM_CHARS = " \t"


class TextNormalizer:
    """
    Normalizes string cells of all-string DataFrames.

    Handles:
    - Trimming leading/trailing spaces and tabs from every cell
    - Blanking cells that contain non-breaking space artifacts

    Missing values (NaN / pd.NA) are passed through untouched.
    """

    def __init__(self, trim_chars: str = TRIM_CHARS):
        """
        Initialize the text normalizer.

        Args:
            trim_chars: Characters stripped from both ends of each cell
        """
        self.trim_chars = trim_chars

    def strip_cell(self, value: Any) -> Any:
        """
        Trim surrounding whitespace from a single cell.

        Args:
            value: Cell value (string or missing)

        Returns:
            Trimmed string, or the value unchanged if it is not a string

        Examples:
            >>> TextNormalizer().strip_cell("  Diazinon\\t")
            'Diazinon'
            >>> TextNormalizer().strip_cell("Diazinon\\u00a0")
            'Diazinon\\xa0'
        """
        if not isinstance(value, str):
            return value
        return value.strip(self.trim_chars)

    def has_nbsp(self, value: Any) -> bool:
        """Check whether a cell contains a non-breaking space."""
        return isinstance(value, str) and NBSP in value

    def strip_frame(self, frame: pd.DataFrame) -> pd.DataFrame:
        """
        Trim every string cell of a DataFrame.

        Args:
            frame: Input DataFrame (not modified)

        Returns:
            New DataFrame with trimmed cells
        """
        if frame.empty:
            return frame.copy()
        return frame.map(self.strip_cell)

    def blank_nbsp_cells(self, frame: pd.DataFrame) -> pd.DataFrame:
        """
        Replace every cell containing a non-breaking space with a missing value.

        The whole cell is blanked, not just the character, so that web
        layout artifacts never reach the reviewer as half-cleaned text.

        Args:
            frame: Input DataFrame (not modified)

        Returns:
            New DataFrame where NBSP-bearing cells are pd.NA
        """
        if frame.empty:
            return frame.copy()
        return frame.map(lambda value: pd.NA if self.has_nbsp(value) else value)

    def blank_markers(self, frame: pd.DataFrame, markers) -> pd.DataFrame:
        """
        Replace cells equal to one of the NA markers with a missing value.

        Run after trimming, so a cell holding only spaces is missing too.

        Args:
            frame: Input DataFrame (not modified)
            markers: Cell values read as missing (e.g. "" and "NA")

        Returns:
            New DataFrame with marker cells set to pd.NA
        """
        markers = set(markers or ())
        if frame.empty or not markers:
            return frame.copy()
        return frame.map(lambda value: pd.NA if isinstance(value, str) and value in markers else value)

    def count_nbsp_cells(self, frame: pd.DataFrame) -> int:
        """Count cells that contain a non-breaking space."""
        if frame.empty:
            return 0
        return int(frame.map(self.has_nbsp).to_numpy().sum())


# Module-level singleton for convenience function
_normalizer_instance = None


def _get_normalizer() -> TextNormalizer:
    """Get or create the module-level TextNormalizer singleton."""
    global _normalizer_instance
    if _normalizer_instance is None:
        _normalizer_instance = TextNormalizer()
    return _normalizer_instance


def clean_output_frame(frame: pd.DataFrame) -> pd.DataFrame:
    """
    Convenience function for the pre-persistence cleanup of a match table.

    Args:
        frame: Match table

    Returns:
        Copy of the table with NBSP-bearing cells set to missing
    """
    return _get_normalizer().blank_nbsp_cells(frame)


def count_nbsp_cells(frame: pd.DataFrame) -> int:
    """Convenience function counting the cells clean_output_frame will blank."""
    return _get_normalizer().count_nbsp_cells(frame)
