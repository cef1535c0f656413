from table_clipboard.exporter import (
    data_to_html, instance_to_html, selection_to_data, selection_to_html, table_by_coords,
)
from table_clipboard.grid_view import InMemoryGrid
from table_clipboard.schemas import ExportOptions, ExportWindow


class TestBodyExport:
    def test_empty_window_is_bare_table(self):
        assert table_by_coords(InMemoryGrid([]), ExportWindow()) == "<table></table>"
        assert selection_to_html(InMemoryGrid([])) == "<table></table>"

    def test_plain_body(self):
        grid = InMemoryGrid([["a", "b"], ["c", "d"]])
        assert selection_to_html(grid) == (
            "<table><tbody>"
            "<tr><td>a</td><td>b</td></tr>"
            "<tr><td>c</td><td>d</td></tr>"
            "</tbody></table>"
        )

    def test_merged_cells(self, merged_grid):
        assert selection_to_html(merged_grid) == (
            "<table><tbody>"
            '<tr><td rowspan="2" colspan="2">m</td><td>x</td></tr>'
            "<tr><td>y</td></tr>"
            "<tr><td>p</td><td>q</td><td>r</td></tr>"
            "</tbody></table>"
        )

    def test_spans_clipped_to_window_rows(self, merged_grid):
        html = selection_to_html(merged_grid, selection=(0, 0, 0, 2))
        assert html == '<table><tbody><tr><td colspan="2">m</td><td>x</td></tr></tbody></table>'

    def test_spans_clipped_to_window_columns(self, merged_grid):
        html = selection_to_html(merged_grid, selection=(0, 0, 1, 0))
        assert html == '<table><tbody><tr><td rowspan="2">m</td></tr><tr></tr></tbody></table>'

    def test_rowspan_near_window_bottom(self):
        grid = InMemoryGrid(
            [["a"], ["b"], ["c"], [None], [None]],
            merge_cells=[{"row": 2, "col": 0, "rowspan": 3, "colspan": 1}],
        )
        html = selection_to_html(grid, selection=(0, 0, 3, 0))
        assert '<td rowspan="2">c</td>' in html
        assert 'rowspan="3"' not in html

    def test_hidden_cells_emit_nothing(self, merged_grid):
        html = selection_to_html(merged_grid)
        assert html.count("<td") == 6

    def test_values_are_encoded(self):
        grid = InMemoryGrid([["a<b", None, "x\ny"]])
        assert selection_to_html(grid) == (
            "<table><tbody><tr><td>a&lt;b</td><td></td><td>x<br>\r\ny</td></tr></tbody></table>"
        )

    def test_ignored_rows_and_columns_are_skipped(self):
        grid = InMemoryGrid([[f"{r}{c}" for c in range(3)] for r in range(3)])
        options = ExportOptions(ignored_rows=[1], ignored_columns=[0])
        assert selection_to_html(grid, options, (0, 0, 2, 2)) == (
            "<table><tbody>"
            "<tr><td>01</td><td>02</td></tr>"
            "<tr><td>21</td><td>22</td></tr>"
            "</tbody></table>"
        )

    def test_colspan_shrinks_over_ignored_columns(self, merged_grid):
        options = ExportOptions(ignored_columns=[1])
        assert selection_to_html(merged_grid, options, (0, 0, 2, 2)) == (
            "<table><tbody>"
            '<tr><td rowspan="2">m</td><td>x</td></tr>'
            "<tr><td>y</td></tr>"
            "<tr><td>p</td><td>r</td></tr>"
            "</tbody></table>"
        )

    def test_rowspan_shrinks_over_ignored_rows(self, merged_grid):
        options = ExportOptions(ignored_rows=[1])
        assert selection_to_html(merged_grid, options, (0, 0, 2, 2)) == (
            "<table><tbody>"
            '<tr><td colspan="2">m</td><td>x</td></tr>'
            "<tr><td>p</td><td>q</td><td>r</td></tr>"
            "</tbody></table>"
        )


class TestHeaderExport:
    def test_column_headers(self, header_grid):
        html = selection_to_html(header_grid, ExportOptions(with_column_headers=True), (0, 0, 0, 1))
        assert html == (
            "<table>"
            "<thead><tr><th>A</th><th>B</th></tr></thead>"
            "<tbody><tr><td>1</td><td>2</td></tr></tbody>"
            "</table>"
        )

    def test_row_and_column_headers(self, header_grid):
        options = ExportOptions(with_column_headers=True, with_row_headers=True)
        html = selection_to_html(header_grid, options, (-1, 0, 0, 1))
        assert html == (
            "<table>"
            "<thead><tr><th>#</th><th>A</th><th>B</th></tr></thead>"
            "<tbody><tr><th>r1</th><td>1</td><td>2</td></tr></tbody>"
            "</table>"
        )

    def test_headers_without_cells(self, header_grid):
        options = ExportOptions(with_cells=False, with_column_headers=True)
        html = selection_to_html(header_grid, options, (0, 0, 1, 1))
        assert html == "<table><thead><tr><th>A</th><th>B</th></tr></thead></table>"

    def test_nested_headers(self, nested_grid):
        html = selection_to_html(nested_grid, ExportOptions(with_column_headers=True))
        assert html == (
            "<table><thead>"
            "<tr><th colspan=2>G</th><th>C</th></tr>"
            "<tr><th>A</th><th>B</th><th>C2</th></tr>"
            "</thead><tbody><tr><td>1</td><td>2</td><td>3</td></tr></tbody></table>"
        )

    def test_nested_headers_first_level_only(self, nested_grid):
        options = ExportOptions(with_column_headers=True, only_first_level=True)
        html = selection_to_html(nested_grid, options)
        assert "<thead><tr><th>A</th><th>B</th><th>C2</th></tr></thead>" in html
        assert "G" not in html

    def test_header_colspan_clipped_to_window(self, nested_grid):
        html = selection_to_html(nested_grid, ExportOptions(with_column_headers=True), (0, 0, 0, 0))
        assert html.startswith("<table><thead><tr><th>G</th></tr><tr><th>A</th></tr></thead>")

    def test_header_inside_span_starts_window(self, nested_grid):
        html = selection_to_html(nested_grid, ExportOptions(with_column_headers=True), (0, 1, 0, 2))
        assert "<tr><th>G</th><th>C</th></tr>" in html


class TestWholeGridExport:
    def test_instance_with_headers(self):
        grid = InMemoryGrid([["x"]], col_headers=["A"], row_headers=["1"])
        assert instance_to_html(grid) == (
            "<table>"
            "<thead><tr><th></th><th>A</th></tr></thead>"
            "<tbody><tr><th>1</th><td>x</td></tr></tbody>"
            "</table>"
        )

    def test_numeric_header_labels_from_settings(self):
        grid = InMemoryGrid.from_settings({
            "data": [[1, 2]],
            "nestedHeaders": [[{"label": 2020, "colspan": 2}], [1, 2]],
            "rowHeaders": [7],
        })
        assert instance_to_html(grid) == (
            "<table><thead>"
            "<tr><th></th><th colspan=2>2020</th></tr>"
            "<tr><th></th><th>1</th><th>2</th></tr>"
            "</thead><tbody><tr><th>7</th><td>1</td><td>2</td></tr></tbody></table>"
        )

    def test_instance_without_headers(self):
        grid = InMemoryGrid([["x", "y"]])
        assert instance_to_html(grid) == "<table><tbody><tr><td>x</td><td>y</td></tr></tbody></table>"

    def test_selection_to_data(self, header_grid):
        options = ExportOptions(with_column_headers=True, with_row_headers=True)
        assert selection_to_data(header_grid, options, (-1, 0, 1, 1)) == [
            ["#", "A", "B"],
            ["r1", "1", "2"],
            ["r2", "3", "4"],
        ]

    def test_selection_to_data_plain_values(self):
        grid = InMemoryGrid([[1, None], ["a<b", 2.5]])
        assert selection_to_data(grid) == [[1, ""], ["a<b", 2.5]]


class TestPlainArrayExport:
    def test_rows_and_cells(self):
        assert data_to_html([["a", "b"], [None, "c  d"]]) == (
            "<table><tbody>"
            "<tr><td>a</td><td>b</td></tr>"
            '<tr><td></td><td>c<span style="mso-spacerun: yes">&nbsp; </span>d</td></tr>'
            "</tbody></table>"
        )

    def test_empty_input(self):
        assert data_to_html([]) == "<table></table>"

    def test_escapes_every_bracket(self):
        assert data_to_html([["<<>>"]]) == "<table><tbody><tr><td>&lt;&lt;&gt;&gt;</td></tr></tbody></table>"

    def test_accepts_tuples_and_numbers(self):
        assert data_to_html(((1, 2.5),)) == "<table><tbody><tr><td>1</td><td>2.5</td></tr></tbody></table>"
