import pytest

from ocr_pdf_to_excel import cli
from ocr_pdf_to_excel.errors import DocumentLoadError
from ocr_pdf_to_excel.main import ConversionReport, PageFailure


@pytest.mark.parametrize("argv", [[], ["solo.pdf"]])
def test_missing_arguments_prints_usage(argv, capsys):
    assert cli.main(argv) == 0
    out = capsys.readouterr().out
    assert "usage:" in out
    assert "output.xlsx" in out


def test_success(monkeypatch, tmp_path):
    calls = {}

    def fake_convert(pdf, xlsx, config):
        calls["args"] = (pdf, xlsx, config)
        return ConversionReport(
            input_path=pdf, output_path=xlsx, page_count=2,
            sheets=["Page 1"], failures=[PageFailure(2, "OCR")],
        )

    monkeypatch.setattr(cli, "pdf_to_excel", fake_convert)
    assert cli.main(["in.pdf", "out.xlsx", "--row-ratio", "10", "--dpi", "200", "--no-autosize"]) == 0

    pdf, xlsx, config = calls["args"]
    assert (pdf, xlsx) == ("in.pdf", "out.xlsx")
    assert config.pixels_per_row_unit == 10.0
    assert config.pixels_per_column_unit == 50.0
    assert config.dpi == 200
    assert config.auto_size_columns is False


def test_conversion_error_exits_non_zero(monkeypatch):
    def broken(*args, **kwargs):
        raise DocumentLoadError("PDF corrupto")

    monkeypatch.setattr(cli, "pdf_to_excel", broken)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["in.pdf", "out.xlsx"])
    assert excinfo.value.code == 1


def test_unexpected_error_exits_non_zero(monkeypatch):
    def broken(*args, **kwargs):
        raise KeyError("boom")

    monkeypatch.setattr(cli, "pdf_to_excel", broken)
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["in.pdf", "out.xlsx"])
    assert excinfo.value.code == 1


def test_config_defaults_when_no_options():
    args = cli.build_parser().parse_args(["a.pdf", "b.xlsx"])
    config = cli.config_from_args(args)
    assert config.pixels_per_row_unit == 20.0
    assert config.pixels_per_column_unit == 50.0
    assert config.dpi == 300
    assert config.ocr_lang == "eng"
    assert config.tessdata_dir is None
    assert config.auto_size_columns is True
