from __future__ import annotations

import numpy as np
import pytest

from xstitch.core.errors import ConfigurationError
from xstitch.core.grid_mapper import map_grid
from xstitch.core.quantizer import SelectionResult
from xstitch.models.pattern import Thread

GRAY = Thread(code="G1", name="Gray", rgb=(100, 100, 100))
GRAY2 = Thread(code="G2", name="Gray 2", rgb=(103, 100, 100))


def _selection(selected, cells, assignments):
    snapped = np.array(cells, dtype=np.uint8)
    return SelectionResult(
        selected=selected,
        snapped=snapped,
        assignments=np.array(assignments, dtype=np.int64),
    )


def test_tolerance_takes_first_thread_in_range():
    sel = _selection([GRAY, GRAY2], [[(103, 100, 100, 255)]], [[1]])
    assert map_grid(sel) == [["G1"]]
    assert map_grid(sel, strategy="assigned") == [["G2"]]


def test_tolerance_miss_leaves_cell_empty():
    sel = _selection([GRAY], [[(0, 0, 0, 255), (104, 96, 105, 255)]], [[0, 0]])
    assert map_grid(sel) == [["", "G1"]]
    assert map_grid(sel, strategy="assigned") == [["G1", "G1"]]


def test_transparent_cells_are_empty():
    sel = _selection([GRAY], [[(100, 100, 100, 0)], [(100, 100, 100, 255)]], [[-1], [0]])
    assert map_grid(sel) == [[""], ["G1"]]
    assert map_grid(sel, strategy="assigned") == [[""], ["G1"]]


def test_matrix_is_row_major():
    cells = [[(100, 100, 100, 255), (0, 0, 0, 0), (100, 100, 100, 255)]]
    sel = _selection([GRAY], cells, [[0, -1, 0]])
    matrix = map_grid(sel)
    assert len(matrix) == 1
    assert matrix[0] == ["G1", "", "G1"]


def test_no_selected_threads():
    sel = _selection([], [[(100, 100, 100, 255)]], [[-1]])
    assert map_grid(sel) == [[""]]


def test_unknown_strategy():
    sel = _selection([GRAY], [[(100, 100, 100, 255)]], [[0]])
    with pytest.raises(ConfigurationError):
        map_grid(sel, strategy="closest")
