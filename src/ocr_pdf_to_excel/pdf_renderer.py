from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import fitz  # PyMuPDF
from PIL import Image

from .config import DEFAULT_DPI
from .errors import DocumentLoadError

log = logging.getLogger(__name__)

PDF_POINTS_PER_INCH = 72.0


class PdfDocument:
    """Documento PDF abierto con PyMuPDF. Se cierra al salir del `with`."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self._doc: Optional[fitz.Document] = None
        if not self.path.is_file():
            raise DocumentLoadError(f"No se encontró el PDF: {self.path}")
        try:
            doc = fitz.open(str(self.path))
        except (RuntimeError, ValueError, OSError) as exc:
            raise DocumentLoadError(f"No se pudo abrir el PDF {self.path}: {exc}") from exc
        if doc.needs_pass:
            doc.close()
            raise DocumentLoadError(f"El PDF está cifrado: {self.path}")
        self._doc = doc

    @property
    def page_count(self) -> int:
        if self._doc is None:
            raise DocumentLoadError("El documento ya está cerrado.")
        return self._doc.page_count

    def render(self, page_index: int, dpi: int = DEFAULT_DPI) -> Image.Image:
        """Renderiza una página (0-indexada) a una imagen RGB."""
        if self._doc is None:
            raise DocumentLoadError("El documento ya está cerrado.")
        zoom = dpi / PDF_POINTS_PER_INCH
        try:
            page = self._doc[page_index]
            pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
        except (RuntimeError, ValueError, IndexError) as exc:
            raise DocumentLoadError(
                f"No se pudo renderizar la página {page_index + 1}: {exc}"
            ) from exc
        mode = "RGB" if pix.n >= 3 else "L"
        image = Image.frombytes(mode, (pix.width, pix.height), pix.samples)
        log.debug("Página %d renderizada a %dx%d px (%d DPI).", page_index + 1, pix.width, pix.height, dpi)
        return image

    def close(self) -> None:
        if self._doc is not None:
            self._doc.close()
            self._doc = None

    def __enter__(self) -> "PdfDocument":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def open_pdf(path: Union[str, Path]) -> PdfDocument:
    return PdfDocument(path)
