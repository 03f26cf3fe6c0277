# src/ocr_pdf_to_excel/exporters.py
from __future__ import annotations
import logging
import zipfile
from pathlib import Path
from typing import List, Optional, Union

from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .cleaners import clean_cell_text
from .errors import SheetOverflowError, SinkWriteError
from .spatial import PageGrid

log = logging.getLogger(__name__)

MAX_COLUMN_WIDTH = 60
COLUMN_PADDING = 2
# límites de una hoja xlsx
MAX_SHEET_ROWS = 1_048_576
MAX_SHEET_COLUMNS = 16_384

def check_sheet_limits(grid: PageGrid) -> None:
    if grid.n_rows > MAX_SHEET_ROWS or grid.n_columns > MAX_SHEET_COLUMNS:
        raise SheetOverflowError(
            f"La rejilla ({grid.n_rows} filas x {grid.n_columns} columnas) excede el máximo de una hoja "
            f"({MAX_SHEET_ROWS} x {MAX_SHEET_COLUMNS}). Revise los ratios de píxeles."
        )

class XlsxWorkbookSink:
    """
    Libro Excel en memoria: una hoja por página procesada.
    Índices de fila/columna 0-based; openpyxl trabaja en 1-based.
    """

    def __init__(self) -> None:
        self._workbook: Optional[Workbook] = Workbook()
        self._default_sheet: Optional[Worksheet] = self._workbook.active

    @property
    def workbook(self) -> Workbook:
        if self._workbook is None:
            raise SinkWriteError("El libro ya está cerrado.")
        return self._workbook

    @property
    def sheet_names(self) -> List[str]:
        return list(self.workbook.sheetnames)

    def create_sheet(self, label: str) -> Worksheet:
        wb = self.workbook
        # la hoja por defecto de openpyxl sobra en cuanto existe una página
        if self._default_sheet is not None:
            wb.remove(self._default_sheet)
            self._default_sheet = None
        return wb.create_sheet(title=label)

    def set_cell(self, sheet: Worksheet, row: int, column: int, text: str) -> None:
        sheet.cell(row=row + 1, column=column + 1, value=clean_cell_text(text))

    def auto_size_column(self, sheet: Worksheet, column: int) -> None:
        letter = get_column_letter(column + 1)
        lengths = [
            len(str(cell.value))
            for (cell,) in sheet.iter_rows(min_col=column + 1, max_col=column + 1)
            if cell.value
        ]
        if not lengths:
            return
        sheet.column_dimensions[letter].width = min(max(lengths) + COLUMN_PADDING, MAX_COLUMN_WIDTH)

    def save(self, path: Union[str, Path]) -> None:
        out = Path(path)
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
            self.workbook.save(str(out))
        except (OSError, ValueError, TypeError, zipfile.BadZipFile) as exc:
            raise SinkWriteError(f"No se pudo guardar el Excel en {out}: {exc}") from exc
        log.info("Excel guardado en: %s", out)

    def close(self) -> None:
        if self._workbook is not None:
            self._workbook.close()
            self._workbook = None

    def __enter__(self) -> "XlsxWorkbookSink":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

def write_page_grid(sink, label: str, grid: PageGrid, *, auto_size: bool = True):
    """
    Materializa una rejilla como hoja: recorre filas 0..max_row y columnas
    0..max_column, escribiendo "" donde no hay celda.
    """
    check_sheet_limits(grid)
    sheet = sink.create_sheet(label)
    if grid.is_empty:
        log.info("Hoja '%s' creada sin contenido.", label)
        return sheet

    frame = grid.to_frame()
    for row_idx, values in enumerate(frame.itertuples(index=False, name=None)):
        for col_idx, text in enumerate(values):
            sink.set_cell(sheet, row_idx, col_idx, text)

    if auto_size:
        for col_idx in range(grid.n_columns):
            sink.auto_size_column(sheet, col_idx)

    log.info("Hoja '%s': %d filas x %d columnas, %d celdas con texto.",
             label, grid.n_rows, grid.n_columns, len(grid.cells))
    return sheet
