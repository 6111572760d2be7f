"""
CAS number normalization and validation module.

Handles CAS (Chemical Abstracts Service) registry numbers as they appear in
the CEDEN pollutant registry and the USEPA benchmark list: sentinel
detection, hyphen stripping for comparison, and check-digit validation.
"""

import re
from typing import Any

import pandas as pd


class CASNormalizer:
    """
    Normalizes and validates CAS Registry Numbers in tabular data.

    CAS numbers are unique identifiers for chemical substances.
    Format: 2-7 digits, hyphen, 2 digits, hyphen, 1 check digit
    Example: 333-41-5 (Diazinon)

    CEDEN stores CAS numbers without hyphens ("333415") and uses "0" when
    no CAS number exists; the benchmark list keeps hyphens and uses "NR"
    (not reported). Both sides are compared in the hyphen-free form.
    """

    # Hyphen-free form: 5 to 10 digits
    DIGITS_PATTERN = re.compile(r'^\d{5,10}$')

    def __init__(self, separator: str = '-'):
        """
        Initialize the CAS normalizer.

        Args:
            separator: Character removed during normalization
        """
        self.separator = separator

    def normalize(self, cas: Any) -> Any:
        """
        Remove separator characters from a CAS number.

        Args:
            cas: CAS number (string or missing)

        Returns:
            Hyphen-free CAS number, or the value unchanged if missing

        Examples:
            >>> normalizer = CASNormalizer()
            >>> normalizer.normalize("333-41-5")
            '333415'
            >>> normalizer.normalize("333415")
            '333415'
        """
        if not isinstance(cas, str):
            return cas
        return cas.replace(self.separator, '')

    def is_reported(self, cas: Any, sentinel: str) -> bool:
        """
        Check that a CAS value is present and is not the absent-value sentinel.

        Args:
            cas: CAS value from a table cell
            sentinel: Source-specific marker for "no CAS number" ("0" or "NR")

        Returns:
            True if the value can take part in CAS matching
        """
        if not isinstance(cas, str) or not cas.strip():
            return False
        return cas != sentinel

    def reported_mask(self, values: pd.Series, sentinel: str) -> pd.Series:
        """
        Boolean mask of rows whose CAS number is usable for matching.

        Args:
            values: CAS column
            sentinel: Absent-value sentinel for this source

        Returns:
            Boolean Series aligned with ``values``
        """
        if values.empty:
            return pd.Series(False, index=values.index, dtype=bool)
        return values.map(lambda cas: self.is_reported(cas, sentinel)).astype(bool)

    def normalize_series(self, values: pd.Series) -> pd.Series:
        """Normalize every CAS number in a column, keeping missing values."""
        return values.map(self.normalize, na_action='ignore')

    def validate_cas(self, cas: Any) -> bool:
        """
        Validate CAS number using check digit algorithm.

        Accepts both the hyphenated and the hyphen-free form.

        The check digit is calculated by:
        1. Remove hyphens from CAS number
        2. Take all digits except the last (check digit)
        3. Starting from the right, multiply each digit by its position (1, 2, 3, ...)
        4. Sum all products
        5. Take sum modulo 10
        6. Compare with check digit

        Args:
            cas: CAS number to validate

        Returns:
            True if CAS number is valid, False otherwise

        Examples:
            >>> normalizer = CASNormalizer()
            >>> normalizer.validate_cas("333-41-5")
            True
            >>> normalizer.validate_cas("333416")
            False
        """
        digits_only = self.normalize(cas)
        if not isinstance(digits_only, str) or not self.DIGITS_PATTERN.match(digits_only):
            return False

        check_digit = int(digits_only[-1])
        total = sum(
            int(digit) * position
            for position, digit in enumerate(reversed(digits_only[:-1]), start=1)
        )
        return total % 10 == check_digit

    def count_invalid(self, values: pd.Series, sentinel: str) -> int:
        """
        Count reported CAS numbers that fail check-digit validation.

        Args:
            values: CAS column
            sentinel: Absent-value sentinel for this source

        Returns:
            Number of malformed CAS numbers (sentinels and missing values excluded)
        """
        reported = values[self.reported_mask(values, sentinel)]
        if reported.empty:
            return 0
        return int((~reported.map(self.validate_cas)).sum())
