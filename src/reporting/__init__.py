"""
Reporting package: CSV match tables, review workbooks, and name lists.
"""

from src.reporting.writer import write_match_tables, write_name_list, write_review_workbook

__all__ = [
    "write_match_tables",
    "write_name_list",
    "write_review_workbook",
]
