# src/ocr_pdf_to_excel/spatial.py
from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, NamedTuple

import pandas as pd

EMPTY_EXTENT = -1


class GridCoordinate(NamedTuple):
    """Celda discreta (fila, columna) derivada de un bounding box."""
    row: int
    column: int


@dataclass(frozen=True)
class PageGrid:
    """
    Rejilla dispersa de una página: solo guarda las celdas ocupadas.
    Una página sin palabras tiene `max_row == max_column == -1`.
    """
    cells: Mapping[GridCoordinate, str] = field(default_factory=dict)
    max_row: int = EMPTY_EXTENT
    max_column: int = EMPTY_EXTENT

    def __post_init__(self) -> None:
        # congelar el mapping para que la rejilla terminada no se pueda mutar
        object.__setattr__(self, "cells", MappingProxyType(dict(self.cells)))

    @property
    def is_empty(self) -> bool:
        return not self.cells

    @property
    def n_rows(self) -> int:
        return self.max_row + 1

    @property
    def n_columns(self) -> int:
        return self.max_column + 1

    def get(self, row: int, column: int, default: str = "") -> str:
        return self.cells.get(GridCoordinate(row, column), default)

    def to_frame(self) -> pd.DataFrame:
        """Expande la rejilla a un DataFrame denso con "" en las celdas vacías."""
        if self.is_empty:
            return pd.DataFrame()
        frame = pd.DataFrame(
            "",
            index=pd.RangeIndex(self.n_rows),
            columns=pd.RangeIndex(self.n_columns),
            dtype=object,
        )
        for (row, column), text in self.cells.items():
            frame.iat[row, column] = text
        return frame
