# src/ocr_pdf_to_excel/parser.py
from __future__ import annotations
import logging
from typing import List, Union
from bs4 import BeautifulSoup
from .structures import BBox, Word, parse_bbox

log = logging.getLogger(__name__)

def _load_soup(text: Union[str, bytes]) -> BeautifulSoup:
    """
    Intenta XML (lxml-xml) y, si no hay nodos HOCR, fallback a HTML (lxml).
    """
    soup_xml = BeautifulSoup(text, "lxml-xml")
    if soup_xml.find(class_=lambda c: c and "ocr_page" in c):
        return soup_xml
    return BeautifulSoup(text, "lxml")

def parse_hocr_words(hocr: Union[str, bytes]) -> List[Word]:
    """
    Extrae las palabras (`ocrx_word`) de un documento hOCR de una página.
    Convierte `bbox x1 y1 x2 y2` a x, y, ancho, alto. No garantiza orden.
    """
    soup = _load_soup(hocr)
    words: List[Word] = []
    skipped = 0

    for w in soup.find_all(class_=lambda c: c and "ocrx_word" in c):
        text = (w.get_text() or "").strip()
        if not text:
            continue
        bb = parse_bbox(w.get("title", ""))
        if not bb:
            skipped += 1
            continue
        box = BBox.from_corners(*bb)
        # Tesseract a veces emite cajas degeneradas; no son palabras válidas
        if box.x < 0 or box.y < 0 or box.width <= 0 or box.height <= 0:
            skipped += 1
            continue
        words.append(Word(text=text, bbox=box))

    if skipped:
        log.debug("Se omitieron %d palabras hOCR sin bbox válido.", skipped)
    return words
