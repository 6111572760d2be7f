"""
Output writers for benchmark matching runs.

Writes the exact and potential match tables as CSV, an optional formatted
Excel review workbook, and the one-name-per-line lists submitted to the
PubChem Identifier Exchange Service when synonym files are refreshed.
"""

import logging
import os
from pathlib import Path
from typing import Tuple

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from src.matching.match_result import MATCH_CONFIDENCE_COLUMN, BenchmarkMatches
from src.matching.types import MatchConfidence
from src.normalization.text_normalizer import clean_output_frame, count_nbsp_cells

logger = logging.getLogger(__name__)

# ── Styling constants ─────────────────────────────────────────────────────────
HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
HEADER_ALIGN = Alignment(horizontal="center", vertical="center", wrap_text=True)

GREEN_FILL = PatternFill(start_color="C6EFCE", end_color="C6EFCE", fill_type="solid")
YELLOW_FILL = PatternFill(start_color="FFF2CC", end_color="FFF2CC", fill_type="solid")

THIN_SIDE = Side(style="thin", color="BFBFBF")
THIN_BORDER = Border(left=THIN_SIDE, right=THIN_SIDE, top=THIN_SIDE, bottom=THIN_SIDE)

SHEET_EXACT = "Exact (CAS)"
SHEET_POTENTIAL = "Potential (synonym)"
SHEET_REVIEW = "Review"
SHEET_SUMMARY = "Summary"


def _temp_path(path: Path) -> Path:
    return path.with_name(f".{path.name}.tmp")


def write_match_tables(
    matches: BenchmarkMatches,
    by_cas_path: Path,
    by_synonym_path: Path,
) -> Tuple[Path, Path]:
    """
    Write both match tables as CSV, or neither.

    Cells containing non-breaking spaces are blanked and missing values are
    written as empty fields. Each table goes to a temporary sibling file
    first; the final files only appear once both writes succeeded.

    Args:
        matches: Result of a matching run
        by_cas_path: Destination of the exact match table
        by_synonym_path: Destination of the potential match table

    Returns:
        Tuple of the two written paths

    Raises:
        OSError: If either file cannot be written (no output is left behind)
    """
    targets = []
    for path, frame in ((by_cas_path, matches.by_cas), (by_synonym_path, matches.by_synonym)):
        blanked = count_nbsp_cells(frame)
        if blanked:
            logger.info(f"Blanking {blanked} cells with non-breaking spaces in {Path(path).name}")
        targets.append((Path(path), clean_output_frame(frame)))
    temps = []
    moved = []

    try:
        for path, frame in targets:
            path.parent.mkdir(parents=True, exist_ok=True)
            temp = _temp_path(path)
            temps.append(temp)
            frame.to_csv(temp, index=False, na_rep="", encoding="utf-8")
        for (path, _), temp in zip(targets, temps):
            os.replace(temp, path)
            moved.append(path)
    except Exception as e:
        logger.error(f"Failed to write match tables: {e}")
        for temp in temps:
            temp.unlink(missing_ok=True)
        # Both tables or neither
        for path in moved:
            path.unlink(missing_ok=True)
        raise

    for path, frame in targets:
        logger.info(f"Wrote {len(frame)} rows to {path}")

    return targets[0][0], targets[1][0]


def write_review_workbook(matches: BenchmarkMatches, output_path: Path) -> Path:
    """
    Write the formatted Excel workbook handed to reviewers.

    Tabs:
        Summary: run statistics
        Review: both tables stacked, tagged with match_confidence
        Exact (CAS): exact match table
        Potential (synonym): candidate match table

    Args:
        matches: Result of a matching run
        output_path: Destination .xlsx path

    Returns:
        The written path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        # ── Tab 1: Summary ─────────────────────────────────────────────
        summary = pd.DataFrame(list(matches.summary().items()), columns=["Metric", "Value"])
        summary.to_excel(writer, sheet_name=SHEET_SUMMARY, index=False)
        _style_sheet(writer.sheets[SHEET_SUMMARY], max_width=40)

        # ── Tab 2: Review ──────────────────────────────────────────────
        review = clean_output_frame(matches.to_review_frame())
        _write_table_sheet(review, writer, SHEET_REVIEW)
        _color_by_confidence(writer.sheets[SHEET_REVIEW], review)

        # ── Tabs 3-4: one per matching pass ────────────────────────────
        _write_table_sheet(clean_output_frame(matches.by_cas), writer, SHEET_EXACT)
        _write_table_sheet(clean_output_frame(matches.by_synonym), writer, SHEET_POTENTIAL)

    logger.info(f"Exported review workbook to {output_path}")
    return output_path


def write_name_list(frame: pd.DataFrame, column: str, output_path: Path) -> Path:
    """
    Write the distinct, non-missing values of a name column, one per line.

    The file starts with a header row naming the column.

    Args:
        frame: Source table
        column: Name column ('ceden_name' or 'benchmark_name')
        output_path: Destination CSV path

    Returns:
        The written path
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    names = frame[[column]].dropna().drop_duplicates()
    names.to_csv(output_path, index=False, encoding="utf-8")

    logger.info(f"Wrote {len(names)} {column} values to {output_path}")
    return output_path


# ═══════════════════════════════════════════════════════════════════════════════
#  Helpers
# ═══════════════════════════════════════════════════════════════════════════════

def _write_table_sheet(frame: pd.DataFrame, writer: pd.ExcelWriter, sheet_name: str) -> None:
    if frame.empty:
        pd.DataFrame({"Note": ["No matches"]}).to_excel(writer, sheet_name=sheet_name, index=False)
        _style_sheet(writer.sheets[sheet_name])
        return

    frame.to_excel(writer, sheet_name=sheet_name, index=False)
    ws = writer.sheets[sheet_name]
    _style_sheet(ws)

    # Freeze top row + both name columns
    ws.freeze_panes = "C2"
    ws.auto_filter.ref = ws.dimensions


def _style_sheet(ws, max_width: int = 45) -> None:
    for cell in ws[1]:
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.alignment = HEADER_ALIGN
        cell.border = THIN_BORDER
    _auto_width(ws, max_width=max_width)


def _color_by_confidence(ws, frame: pd.DataFrame) -> None:
    if frame.empty or MATCH_CONFIDENCE_COLUMN not in frame.columns:
        return

    tag_col = frame.columns.get_loc(MATCH_CONFIDENCE_COLUMN) + 1
    for row_idx in range(2, len(frame) + 2):
        tag = ws.cell(row=row_idx, column=tag_col).value
        fill = GREEN_FILL if tag == MatchConfidence.EXACT.value else YELLOW_FILL
        for col_idx in range(1, len(frame.columns) + 1):
            ws.cell(row=row_idx, column=col_idx).fill = fill


def _auto_width(ws, max_width: int = 50) -> None:
    """Auto-adjust column widths based on content."""
    for column_cells in ws.columns:
        col_letter = get_column_letter(column_cells[0].column)
        max_len = max(len(str(cell.value or "")) for cell in column_cells)
        ws.column_dimensions[col_letter].width = min(max_len + 3, max_width)
