from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple

import pandas as pd

from .schema import REPORT_COLUMNS, FlatRow, rows_to_cells
from .sheets import unique_sheet_name

LOGGER = logging.getLogger(__name__)

TABLE_STYLE = "Table Style Medium 2"
TABLE_NAME = "Permissions"
COLUMN_WIDTH = 20

SheetRows = Tuple[str, Sequence[FlatRow]]


def _table_name(index: int) -> str:
    # Excel table names are unique per workbook.
    return TABLE_NAME if index == 1 else f"{TABLE_NAME}_{index}"


def add_permissions_table(worksheet, rows: Sequence[FlatRow], table_name: str = TABLE_NAME) -> None:
    """Write the header row plus ``rows`` as one Excel table anchored at A1."""

    cells = rows_to_cells(rows)
    last_row = max(len(cells), 1)
    last_col = len(REPORT_COLUMNS) - 1

    worksheet.add_table(
        0,
        0,
        last_row,
        last_col,
        {
            "name": table_name,
            "style": TABLE_STYLE,
            "header_row": True,
            "autofilter": True,
            "banded_rows": True,
            "columns": [{"header": header} for header in REPORT_COLUMNS],
        },
    )

    for row_idx, row_cells in enumerate(cells, start=1):
        for col_idx, value in enumerate(row_cells):
            if value:
                # write_string keeps labels such as "=Total" from becoming formulas.
                worksheet.write_string(row_idx, col_idx, value)

    worksheet.set_column(0, last_col, COLUMN_WIDTH)


def write_permissions_workbook(output_path: Path, sheets: Sequence[SheetRows]) -> List[str]:
    """
    Write one worksheet per ``(sheet_name, rows)`` pair and return the names used.

    Sheet names that collide with an earlier sheet are suffixed (see
    ``unique_sheet_name``). The parent directory is created when missing.
    """

    if not sheets:
        raise ValueError("No worksheets to write")

    output_path = Path(output_path)
    if not output_path.parent.exists():
        output_path.parent.mkdir(parents=True, exist_ok=True)
        LOGGER.info("Created output directory: %s", output_path.parent)

    written: List[str] = []
    with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
        workbook = writer.book
        for index, (requested_name, rows) in enumerate(sheets, start=1):
            # Name as it would be written into an empty workbook.
            base_name = unique_sheet_name(requested_name, ())
            sheet_name = unique_sheet_name(requested_name, written)
            if sheet_name != base_name:
                LOGGER.warning("Sheet name '%s' already used; writing as '%s'", requested_name, sheet_name)
            worksheet = workbook.add_worksheet(sheet_name)
            add_permissions_table(worksheet, rows, _table_name(index))
            written.append(sheet_name)

    LOGGER.info("Excel file generated successfully: %s", output_path)
    return written
