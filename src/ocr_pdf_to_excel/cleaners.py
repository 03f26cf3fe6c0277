# src/ocr_pdf_to_excel/cleaners.py
from __future__ import annotations
import logging

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

log = logging.getLogger(__name__)

def clean_cell_text(text: object) -> str:
    """Limpia el texto de una celda individual antes de escribirlo en la hoja."""
    if not isinstance(text, str):
        return ""
    cleaned = ILLEGAL_CHARACTERS_RE.sub("", text)
    if cleaned != text:
        log.debug("Se quitaron caracteres de control de la celda %r.", text)
    return cleaned
