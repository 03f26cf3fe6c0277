from __future__ import annotations

import logging
from typing import List, Optional

import pytesseract
from PIL import Image

from .config import DEFAULT_OCR_LANG, DEFAULT_OEM, DEFAULT_PSM, ConversionConfig
from .errors import ConfigurationError, PageOcrError
from .parser import parse_hocr_words
from .structures import Word

log = logging.getLogger(__name__)


def ensure_tesseract_available() -> str:
    """Verifica que el binario de Tesseract se pueda ejecutar. Devuelve su versión."""
    try:
        version = pytesseract.get_tesseract_version()
    except (pytesseract.TesseractNotFoundError, OSError) as exc:
        raise ConfigurationError(
            "Tesseract no está instalado o no está en el PATH."
        ) from exc
    log.debug("Tesseract %s disponible.", version)
    return str(version)


def _tesseract_config(psm: int, oem: int, tessdata_dir: Optional[str]) -> str:
    config = f"--oem {oem} --psm {psm}"
    if tessdata_dir:
        config += f' --tessdata-dir "{tessdata_dir}"'
    return config


def extract_words(
    image: Image.Image,
    *,
    lang: str = DEFAULT_OCR_LANG,
    tessdata_dir: Optional[str] = None,
    psm: int = DEFAULT_PSM,
    oem: int = DEFAULT_OEM,
) -> List[Word]:
    """
    Ejecuta Tesseract sobre la imagen de una página y devuelve sus palabras.

    Usa la salida HOCR (`ocrx_word` con bbox). Cualquier fallo de Tesseract
    se traduce a `PageOcrError`.
    """
    custom_config = _tesseract_config(psm, oem, tessdata_dir)
    try:
        hocr_bytes = pytesseract.image_to_pdf_or_hocr(
            image, extension="hocr", lang=lang, config=custom_config
        )
    except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError, RuntimeError, OSError) as exc:
        raise PageOcrError(f"Tesseract falló: {exc}") from exc
    return parse_hocr_words(hocr_bytes)


class TesseractWordSource:
    """Fuente de palabras con los parámetros OCR fijados por la configuración."""

    def __init__(self, config: ConversionConfig) -> None:
        self.lang = config.ocr_lang
        self.tessdata_dir = config.tessdata_dir
        self.psm = config.psm
        self.oem = config.oem

    def __call__(self, image: Image.Image) -> List[Word]:
        return extract_words(
            image,
            lang=self.lang,
            tessdata_dir=self.tessdata_dir,
            psm=self.psm,
            oem=self.oem,
        )
