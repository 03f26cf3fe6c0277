from __future__ import annotations

import logging
import tempfile
from contextlib import ExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from PIL import Image

from .config import ConversionConfig
from .errors import InvalidWordError, PageOcrError, SheetOverflowError
from .exporters import XlsxWorkbookSink, check_sheet_limits, write_page_grid
from .grid_builder import build_page_grid
from .ocr_utils import TesseractWordSource, ensure_tesseract_available
from .pdf_renderer import open_pdf
from .structures import Word

log = logging.getLogger(__name__)

WordSource = Callable[[Image.Image], Sequence[Word]]

SHEET_LABEL = "Page {n}"


@dataclass
class PageFailure:
    page_number: int
    reason: str


@dataclass
class ConversionReport:
    input_path: str
    output_path: str
    page_count: int = 0
    sheets: List[str] = field(default_factory=list)
    failures: List[PageFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def sheet_label(page_number: int) -> str:
    return SHEET_LABEL.format(n=page_number)


class PageAssembler:
    """
    Orquesta la conversión página a página:
    render → OCR → rejilla → hoja. Una página con OCR fallido se omite
    (no se crea hoja) y la conversión continúa con la siguiente.
    """

    def __init__(
        self,
        config: Optional[ConversionConfig] = None,
        *,
        open_document: Callable = open_pdf,
        word_source: Optional[WordSource] = None,
        sink_factory: Callable = XlsxWorkbookSink,
    ) -> None:
        self.config = (config or ConversionConfig()).validate()
        self.open_document = open_document
        self.sink_factory = sink_factory
        if word_source is None:
            ensure_tesseract_available()
            word_source = TesseractWordSource(self.config)
        self.word_source = word_source

    def _image_dir(self, stack: ExitStack) -> Path:
        if self.config.image_dir:
            path = Path(self.config.image_dir)
            path.mkdir(parents=True, exist_ok=True)
            return path
        tmp = stack.enter_context(tempfile.TemporaryDirectory(prefix="pdf_images_"))
        log.debug("Directorio temporal de imágenes: %s", tmp)
        return Path(tmp)

    def _process_page(self, document, sink, page_index: int, image_dir: Path, report: ConversionReport) -> None:
        page_number = page_index + 1
        log.info("Procesando página %d de %d", page_number, report.page_count)

        image = document.render(page_index, self.config.dpi)
        image_path = image_dir / f"page_{page_number}.png"
        image.save(image_path)
        log.debug(" - Página %d renderizada en %s", page_number, image_path)

        try:
            words = list(self.word_source(image))
            log.info(" - OCR completado para la página %d: %d palabras.", page_number, len(words))
            grid = build_page_grid(words, self.config)
            check_sheet_limits(grid)
        except (PageOcrError, InvalidWordError, SheetOverflowError) as exc:
            exc.page_number = page_number
            log.error(" - Error en la página %d, se omite: %s", page_number, exc)
            report.failures.append(PageFailure(page_number=page_number, reason=str(exc)))
            return

        label = sheet_label(page_number)
        write_page_grid(sink, label, grid, auto_size=self.config.auto_size_columns)
        report.sheets.append(label)

    def convert(self, pdf_path: Union[str, Path], output_path: Union[str, Path]) -> ConversionReport:
        report = ConversionReport(input_path=str(pdf_path), output_path=str(output_path))

        with ExitStack() as stack:
            document = stack.enter_context(self.open_document(pdf_path))
            sink = stack.enter_context(self.sink_factory())
            image_dir = self._image_dir(stack)

            report.page_count = document.page_count
            log.info("PDF abierto: %s (%d páginas)", pdf_path, report.page_count)

            for page_index in range(report.page_count):
                self._process_page(document, sink, page_index, image_dir, report)

            sink.save(output_path)

        log.info(
            "Conversión terminada: %d hojas, %d páginas omitidas.",
            len(report.sheets), len(report.failures),
        )
        return report


def pdf_to_excel(
    pdf_path: Union[str, Path],
    xlsx_path: Union[str, Path],
    config: Optional[ConversionConfig] = None,
    **overrides,
) -> ConversionReport:
    """Convierte un PDF escaneado a Excel con una hoja por página."""
    config = (config or ConversionConfig()).with_overrides(**overrides)
    return PageAssembler(config).convert(pdf_path, xlsx_path)
