from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config import ConversionConfig
from .errors import ConversionError
from .main import pdf_to_excel

log = logging.getLogger(__name__)

USAGE_EXAMPLE = "Ejemplo: ocr-pdf-to-excel input.pdf output.xlsx"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ocr-pdf-to-excel",
        description="Convierte un PDF escaneado a Excel (OCR + rejilla por posición). Una hoja por página.",
    )
    parser.add_argument("input_pdf", nargs="?", help="Ruta al PDF de entrada")
    parser.add_argument("output_xlsx", nargs="?", help="Ruta al archivo .xlsx de salida")
    parser.add_argument("--row-ratio", type=float, help="Píxeles por fila de Excel (default: 20.0)")
    parser.add_argument("--col-ratio", type=float, help="Píxeles por columna de Excel (default: 50.0)")
    parser.add_argument("--dpi", type=int, help="Resolución de render de cada página (default: 300)")
    parser.add_argument("--lang", type=str, help="Idioma OCR para Tesseract (default: eng)")
    parser.add_argument("--tessdata-dir", type=str, help="Directorio con los .traineddata de Tesseract")
    parser.add_argument("--psm", type=int, help="Page segmentation mode de Tesseract (default: 3)")
    parser.add_argument("--oem", type=int, help="OCR engine mode de Tesseract (default: 3)")
    parser.add_argument("--keep-images", type=str, metavar="DIR",
                        help="Guarda las páginas renderizadas en DIR en lugar de un directorio temporal")
    parser.add_argument("--no-autosize", action="store_true", help="No ajustar el ancho de las columnas")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")
    return parser


def config_from_args(args: argparse.Namespace) -> ConversionConfig:
    return ConversionConfig().with_overrides(
        pixels_per_row_unit=args.row_ratio,
        pixels_per_column_unit=args.col_ratio,
        dpi=args.dpi,
        ocr_lang=args.lang,
        tessdata_dir=args.tessdata_dir,
        psm=args.psm,
        oem=args.oem,
        image_dir=args.keep_images,
        auto_size_columns=False if args.no_autosize else None,
    )


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    parser = build_parser()

    args = parser.parse_args(argv)
    if not args.input_pdf or not args.output_xlsx:
        parser.print_usage()
        print(USAGE_EXAMPLE)
        return 0

    logging.basicConfig(level=args.loglevel, format="%(asctime)s - %(levelname)s - %(message)s")
    log.info("PDF : %s", args.input_pdf)
    log.info("XLSX: %s", args.output_xlsx)

    try:
        report = pdf_to_excel(args.input_pdf, args.output_xlsx, config_from_args(args))
    except ConversionError as e:
        log.error("Error durante la conversión: %s", e)
        if e.__cause__ is not None:
            log.error("Detalle: %s", e.__cause__)
        sys.exit(1)
    except Exception as e:
        log.error("Ocurrió un error inesperado: %s", e, exc_info=True)
        sys.exit(1)

    for failure in report.failures:
        log.warning("Página %d omitida: %s", failure.page_number, failure.reason)
    log.info("✔ Conversión completada (%d hojas). Salida: %s", len(report.sheets), report.output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
