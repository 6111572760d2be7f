"""
Input loading package.

Reads the flat pollutant, benchmark, and synonym tables into normalized
all-string DataFrames.
"""

from src.loading.loader import LoadError, TableLoader, TableSpec, TABLE_SPECS

__all__ = [
    "LoadError",
    "TableLoader",
    "TableSpec",
    "TABLE_SPECS",
]
