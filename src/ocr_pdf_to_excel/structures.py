from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple
import re

BBOX_RE = re.compile(r"bbox (-?\d+)\s+(-?\d+)\s+(-?\d+)\s+(-?\d+)")

def parse_bbox(title_attr: str) -> Optional[Tuple[int, int, int, int]]:
    """Extrae `x1 y1 x2 y2` del atributo title de un nodo hOCR."""
    if not title_attr:
        return None
    m = BBOX_RE.search(title_attr)
    if not m:
        return None
    x1, y1, x2, y2 = map(int, m.groups())
    return x1, y1, x2, y2

@dataclass(frozen=True)
class BBox:
    """Bounding box en píxeles: esquina superior izquierda + tamaño."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_corners(cls, x1: float, y1: float, x2: float, y2: float) -> "BBox":
        return cls(x=x1, y=y1, width=x2 - x1, height=y2 - y1)

@dataclass(frozen=True)
class Word:
    """Palabra reconocida por OCR con su posición en la imagen de la página."""
    text: str
    bbox: BBox

    @classmethod
    def from_xywh(cls, text: str, x: float, y: float, width: float, height: float) -> "Word":
        return cls(text=text, bbox=BBox(x=x, y=y, width=width, height=height))
