import pytest

from table_clipboard.grid_view import InMemoryGrid


@pytest.fixture
def merged_grid():
    """3x3 grid with a 2x2 merge anchored at A1."""
    return InMemoryGrid(
        [
            ["m", None, "x"],
            [None, None, "y"],
            ["p", "q", "r"],
        ],
        merge_cells=[{"row": 0, "col": 0, "rowspan": 2, "colspan": 2}],
    )


@pytest.fixture
def header_grid():
    return InMemoryGrid(
        [["1", "2"], ["3", "4"]],
        col_headers=["A", "B"],
        row_headers=["r1", "r2"],
        corner_label="#",
    )


@pytest.fixture
def nested_grid():
    return InMemoryGrid(
        [[1, 2, 3]],
        nested_headers=[
            [{"label": "G", "colspan": 2}, "C"],
            ["A", "B", "C2"],
        ],
    )
