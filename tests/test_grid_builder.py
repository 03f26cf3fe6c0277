"""
Tests de la rejilla por posición (grid_builder).

Run with: pytest tests/test_grid_builder.py -v
"""

import pytest

from ocr_pdf_to_excel.config import ConversionConfig
from ocr_pdf_to_excel.errors import InvalidWordError, PageError
from ocr_pdf_to_excel.grid_builder import (
    build_page_grid,
    grid_coordinate,
    sort_reading_order,
)
from ocr_pdf_to_excel.spatial import GridCoordinate
from ocr_pdf_to_excel.structures import Word


def w(text, x, y, width=10, height=10):
    return Word.from_xywh(text, x, y, width, height)


@pytest.fixture
def config():
    return ConversionConfig()


class TestGridCoordinate:

    def test_default_ratios(self, config):
        assert grid_coordinate(w("Age", 260, 5), config) == GridCoordinate(0, 5)

    def test_truncates_fractional_positions(self, config):
        assert grid_coordinate(w("x", 99.9, 39.99), config) == GridCoordinate(1, 1)

    def test_exact_boundaries(self, config):
        assert grid_coordinate(w("x", 100, 40), config) == (2, 2)

    def test_custom_ratios(self):
        cfg = ConversionConfig(pixels_per_row_unit=10.0, pixels_per_column_unit=25.0)
        assert grid_coordinate(w("x", 60, 35), cfg) == (3, 2)


class TestSortReadingOrder:

    def test_y_then_x(self):
        words = [w("c", 5, 30), w("b", 50, 10), w("a", 10, 10)]
        assert [x.text for x in sort_reading_order(words)] == ["a", "b", "c"]

    def test_exact_ties_keep_input_order(self):
        words = [w("first", 10, 10), w("second", 10, 10), w("third", 10, 10)]
        assert [x.text for x in sort_reading_order(words)] == ["first", "second", "third"]

    def test_does_not_mutate_input(self):
        words = [w("b", 5, 30), w("a", 5, 10)]
        sort_reading_order(words)
        assert [x.text for x in words] == ["b", "a"]


class TestBuildPageGrid:

    def test_name_age_example(self, config):
        grid = build_page_grid([w("Name", 10, 5, 40, 15), w("Age", 260, 5, 30, 15)], config)
        assert dict(grid.cells) == {(0, 0): "Name", (0, 5): "Age"}
        assert grid.max_row == 0
        assert grid.max_column == 5

    def test_same_cell_merge(self, config):
        grid = build_page_grid([w("A", 0, 0), w("B", 1, 0)], config)
        assert grid.get(0, 0) == "A B"
        assert len(grid.cells) == 1

    def test_merge_follows_reading_order_not_input_order(self, config):
        grid = build_page_grid([w("world", 30, 4), w("hello", 2, 4), w("top", 40, 1)], config)
        assert grid.get(0, 0) == "top hello world"

    def test_extents_track_maximums(self, config):
        grid = build_page_grid([w("a", 0, 400), w("b", 520, 0), w("c", 60, 60)], config)
        assert grid.max_row == 20
        assert grid.max_column == 10
        assert grid.n_rows == 21
        assert grid.n_columns == 11

    def test_empty_page(self, config):
        grid = build_page_grid([], config)
        assert grid.is_empty
        assert grid.max_row == -1
        assert grid.max_column == -1
        assert grid.to_frame().empty

    def test_deterministic(self, config):
        words = [w("q", 300, 80), w("p", 20, 80), w("r", 21, 80), w("s", 0, 0)]
        first = build_page_grid(words, config)
        second = build_page_grid(list(reversed(words)), config)
        assert dict(first.cells) == dict(second.cells)
        assert (first.max_row, first.max_column) == (second.max_row, second.max_column)

    def test_grid_is_read_only(self, config):
        grid = build_page_grid([w("a", 0, 0)], config)
        with pytest.raises(TypeError):
            grid.cells[GridCoordinate(1, 1)] = "x"

    def test_accepts_generator(self, config):
        grid = build_page_grid((w(t, 0, 0) for t in ["x", "y"]), config)
        assert grid.get(0, 0) == "x y"


class TestInvalidWords:

    @pytest.mark.parametrize(
        "word",
        [
            w("neg-x", -1, 0),
            w("neg-y", 0, -5),
            w("zero-width", 0, 0, width=0),
            w("neg-height", 0, 0, height=-3),
            w("nan", float("nan"), 0),
        ],
    )
    def test_rejected(self, config, word):
        with pytest.raises(InvalidWordError) as excinfo:
            build_page_grid([w("ok", 0, 0), word], config)
        assert excinfo.value.word is word

    def test_is_page_scoped(self, config):
        with pytest.raises(PageError):
            build_page_grid([w("bad", -1, -1)], config)


class TestToFrame:

    def test_dense_with_blanks(self, config):
        grid = build_page_grid([w("a", 0, 0), w("b", 100, 20)], config)
        frame = grid.to_frame()
        assert frame.shape == (2, 3)
        assert frame.values.tolist() == [["a", "", ""], ["", "", "b"]]
