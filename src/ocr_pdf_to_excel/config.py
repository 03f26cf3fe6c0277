from __future__ import annotations

import math
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

# Heurística: a 300 DPI una fila de Excel ocupa ~20 px y una columna ~50 px.
DEFAULT_PIXELS_PER_ROW = 20.0
DEFAULT_PIXELS_PER_COLUMN = 50.0
DEFAULT_DPI = 300
DEFAULT_OCR_LANG = "eng"
DEFAULT_PSM = 3
DEFAULT_OEM = 3


@dataclass(frozen=True)
class ConversionConfig:
    """Parámetros de una corrida de conversión. No cambian entre páginas."""

    pixels_per_row_unit: float = DEFAULT_PIXELS_PER_ROW
    pixels_per_column_unit: float = DEFAULT_PIXELS_PER_COLUMN
    dpi: int = DEFAULT_DPI
    ocr_lang: str = DEFAULT_OCR_LANG
    tessdata_dir: Optional[str] = None
    psm: int = DEFAULT_PSM
    oem: int = DEFAULT_OEM
    image_dir: Optional[str] = None
    auto_size_columns: bool = True

    def validate(self) -> "ConversionConfig":
        for name in ("pixels_per_row_unit", "pixels_per_column_unit"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value) or value <= 0:
                raise ConfigurationError(f"{name} debe ser un número positivo, recibido: {value!r}")
        if not isinstance(self.dpi, int) or self.dpi <= 0:
            raise ConfigurationError(f"dpi debe ser un entero positivo, recibido: {self.dpi!r}")
        if not self.ocr_lang:
            raise ConfigurationError("ocr_lang no puede estar vacío.")
        if self.tessdata_dir is not None:
            path = Path(self.tessdata_dir)
            if not path.is_dir():
                raise ConfigurationError(
                    f"TESSDATA no encontrado o no es un directorio: {self.tessdata_dir}"
                )
        if self.image_dir is not None and Path(self.image_dir).exists() and not Path(self.image_dir).is_dir():
            raise ConfigurationError(f"image_dir existe y no es un directorio: {self.image_dir}")
        return self

    def with_overrides(self, **overrides) -> "ConversionConfig":
        """Copia con los campos dados; los valores None se ignoran."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})
