"""
Normalization package for pollutant and benchmark tables.

This package provides CAS number normalization and validation, plus the
cell-level text cleanup applied when tables are read and written.
"""

from .text_normalizer import TextNormalizer, clean_output_frame, NBSP
from .cas_normalizer import CASNormalizer

__all__ = [
    'TextNormalizer',
    'clean_output_frame',
    'NBSP',
    'CASNormalizer',
]
