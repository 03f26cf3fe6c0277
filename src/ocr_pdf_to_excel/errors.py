# src/ocr_pdf_to_excel/errors.py
from __future__ import annotations
from typing import Any, Optional


class ConversionError(Exception):
    """Error base de la conversión PDF → Excel."""


class ConfigurationError(ConversionError):
    """Configuración inválida (ratios, DPI, tessdata, Tesseract ausente)."""


class DocumentLoadError(ConversionError):
    """El PDF de entrada no se puede abrir, parsear o renderizar."""


class SinkWriteError(ConversionError):
    """No se pudo persistir el libro Excel."""


class PageError(ConversionError):
    """Error acotado a una sola página: la página se omite y se continúa."""

    def __init__(self, message: str, *, page_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.page_number = page_number


class PageOcrError(PageError):
    pass


class InvalidWordError(PageError, ValueError):
    """Palabra con coordenadas negativas o tamaño no positivo."""

    def __init__(self, message: str, *, word: Any = None, page_number: Optional[int] = None) -> None:
        super().__init__(message, page_number=page_number)
        self.word = word


class SheetOverflowError(PageError):
    """La rejilla de la página no cabe en una hoja de Excel."""
