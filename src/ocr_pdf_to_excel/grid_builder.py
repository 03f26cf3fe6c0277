# src/ocr_pdf_to_excel/grid_builder.py
from __future__ import annotations
import logging
import math
from typing import Dict, Iterable, List, Sequence

from .config import ConversionConfig
from .errors import InvalidWordError
from .spatial import GridCoordinate, PageGrid
from .structures import Word

log = logging.getLogger(__name__)

def validate_word(word: Word) -> None:
    """Rechaza palabras con coordenadas negativas o tamaño no positivo."""
    b = word.bbox
    values = (b.x, b.y, b.width, b.height)
    if not all(isinstance(v, (int, float)) and math.isfinite(v) for v in values):
        raise InvalidWordError(f"Bounding box no numérico para {word.text!r}: {b}", word=word)
    if b.x < 0 or b.y < 0:
        raise InvalidWordError(f"Coordenada negativa para {word.text!r}: x={b.x} y={b.y}", word=word)
    if b.width <= 0 or b.height <= 0:
        raise InvalidWordError(
            f"Tamaño no positivo para {word.text!r}: width={b.width} height={b.height}", word=word
        )

def grid_coordinate(word: Word, config: ConversionConfig) -> GridCoordinate:
    """fila = trunc(y / px_fila), columna = trunc(x / px_columna)."""
    return GridCoordinate(
        row=int(word.bbox.y / config.pixels_per_row_unit),
        column=int(word.bbox.x / config.pixels_per_column_unit),
    )

def sort_reading_order(words: Sequence[Word]) -> List[Word]:
    """Arriba→abajo por `y`, izquierda→derecha por `x`. Empates exactos conservan el orden de entrada."""
    return sorted(words, key=lambda w: (w.bbox.y, w.bbox.x))

def _append_text(current: object, text: str) -> str:
    # una celda que no sea texto cuenta como vacía
    if isinstance(current, str) and current:
        return f"{current} {text}"
    return text

def build_page_grid(words: Iterable[Word], config: ConversionConfig) -> PageGrid:
    """
    Ubica las palabras de una página en una rejilla (fila, columna).

    Las palabras que caen en la misma celda se concatenan con un espacio,
    en orden de lectura. No guarda estado entre páginas.
    """
    words = list(words)
    for word in words:
        validate_word(word)

    ordered = sort_reading_order(words)
    if not ordered:
        log.debug("Página sin palabras: rejilla vacía.")
        return PageGrid()

    cells: Dict[GridCoordinate, str] = {}
    max_row = max_column = 0
    for word in ordered:
        key = grid_coordinate(word, config)
        cells[key] = _append_text(cells.get(key), word.text)
        max_row = max(max_row, key.row)
        max_column = max(max_column, key.column)

    grid = PageGrid(cells=cells, max_row=max_row, max_column=max_column)
    log.debug(
        "Se ubicaron %d palabras en %d celdas (max_row=%d, max_column=%d).",
        len(ordered), len(cells), grid.max_row, grid.max_column,
    )
    return grid
