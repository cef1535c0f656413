"""HTML 내보내기 - 그리드 좌표 창 / 2D 배열 → 클립보드용 <table> 문자열

스프레드시트(Excel, Google Sheets)에 붙여넣을 수 있는 형태로 직렬화한다.
  - 헤더 단마다 <thead> 안의 <tr> 1개, 행 헤더는 각 행 앞의 <th>
  - 병합 셀은 창 경계에서 잘린 rowspan/colspan, 가려진(hidden) 칸은 출력 안 함
  - 셀 값은 모두 encode_html_entities 를 거친다
"""
import logging
from typing import Any, Iterable, Mapping, Sequence

from table_clipboard.coords import resolve_export_window
from table_clipboard.grid_view import GridView, Selection
from table_clipboard.schemas import ExportOptions, ExportWindow
from table_clipboard.utils.html_utils import encode_cell_value

logger = logging.getLogger(__name__)


def _parse_span(value) -> int:
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return 1


def _value_at(data: Sequence[Sequence[Any]], row: int, col: int) -> Any:
    if row < len(data) and col < len(data[row]):
        return data[row][col]
    return None


def _visible_span(span: int, offset: int, count: int, ignored: frozenset[int]) -> int:
    """offset 부터 span 칸 중 창 안에 있고 제외되지 않은 칸 수"""
    return sum(1 for o in range(offset, min(offset + span, count)) if o not in ignored)


def _span_attrs(meta: Mapping[str, Any], row_offset: int, col_offset: int, window: ExportWindow) -> str:
    """rowspan/colspan 을 창 경계와 제외된 행/열만큼 줄이고, 1 이하면 생략"""
    attrs = []
    if meta.get("rowspan"):
        rowspan = _visible_span(
            _parse_span(meta["rowspan"]), row_offset, window.count_rows(), window.ignored_rows
        )
        if rowspan > 1:
            attrs.append(f' rowspan="{rowspan}"')
    if meta.get("colspan"):
        colspan = _visible_span(
            _parse_span(meta["colspan"]), col_offset, window.count_columns(), window.ignored_columns
        )
        if colspan > 1:
            attrs.append(f' colspan="{colspan}"')
    return "".join(attrs)


def _header_colspan(grid: GridView, level: int, col: int, columns_left: int) -> int:
    """렌더링된 헤더 셀의 colspan 속성 (창 경계에서 자름)"""
    cell = grid.get_cell(level, col)
    colspan = cell.get("colspan") if cell is not None else None
    if not colspan:
        return 1
    return min(_parse_span(colspan), columns_left)


def get_headers_html(grid: GridView, window: ExportWindow) -> list[str]:
    """열 헤더 단별 <tr> 토큰. 헤더 행이 없으면 빈 리스트 (<thead> 생략)."""
    if window.start_column_header_level is None:
        return []

    headers = []
    count_columns = window.count_columns()

    for level in range(window.start_column_header_level, 0):
        tr = ["<tr>"]
        if window.with_row_headers:
            tr.append(f"<th>{encode_cell_value(grid.get_col_header(-1, level))}</th>")

        offset = 0
        while offset < count_columns:
            col = window.start_column + offset
            colspan = _header_colspan(grid, level, col, count_columns - offset)
            # 제외된 열은 span 에서도 뺀다
            visible = _visible_span(colspan, offset, count_columns, window.ignored_columns)
            if visible:
                attr = f" colspan={visible}" if visible > 1 else ""
                tr.append(f"<th{attr}>{encode_cell_value(grid.get_col_header(col, level))}</th>")
            offset += colspan

        tr.append("</tr>")
        headers.extend(tr)

    if headers:
        return ["<thead>", *headers, "</thead>"]
    return []


def get_body_html(grid: GridView, window: ExportWindow) -> list[str]:
    """본문 <tr> 토큰. 출력할 행이 없으면 빈 리스트 (<tbody> 생략)."""
    if not window.has_body:
        return []

    cells = []
    data = grid.get_data(window.start_row, window.start_column, window.end_row, window.end_column)
    count_rows = window.count_rows()
    count_columns = window.count_columns()

    for row_offset in range(count_rows):
        if row_offset in window.ignored_rows:
            continue
        row = window.start_row + row_offset
        tr = ["<tr>"]

        if window.with_row_headers:
            tr.append(f"<th>{encode_cell_value(grid.get_row_header(row))}</th>")

        for col_offset in range(count_columns):
            if col_offset in window.ignored_columns:
                continue
            meta = grid.get_cell_meta(row, window.start_column + col_offset)
            if meta.get("hidden"):
                continue
            attrs = _span_attrs(meta, row_offset, col_offset, window)
            value = encode_cell_value(_value_at(data, row_offset, col_offset))
            tr.append(f"<td{attrs}>{value}</td>")

        tr.append("</tr>")
        cells.extend(tr)

    if cells:
        return ["<tbody>", *cells, "</tbody>"]
    return []


def table_by_coords(grid: GridView, window: ExportWindow) -> str:
    """좌표 창 → <table> 문자열 (헤더 + 본문)"""
    return "".join(["<table>", *get_headers_html(grid, window), *get_body_html(grid, window), "</table>"])


def selection_to_html(
    grid: GridView,
    options: ExportOptions | None = None,
    selection: Selection | None = None,
) -> str:
    """선택 영역을 클립보드용 HTML로 변환"""
    window = resolve_export_window(grid, options, selection)
    html = table_by_coords(grid, window)
    logger.debug(f"HTML 내보내기: {len(html)}자")
    return html


def instance_to_html(grid: GridView) -> str:
    """그리드 전체를 HTML로 변환 (그리드에 있는 행/열 헤더 포함)"""
    include_row_headers = grid.has_row_headers()
    include_column_headers = grid.has_col_headers()
    start = -1 if include_row_headers or include_column_headers else 0
    options = ExportOptions(
        with_column_headers=include_column_headers,
        with_row_headers=include_row_headers,
    )
    selection = (start, start, grid.count_rows() - 1, grid.count_cols() - 1)
    return selection_to_html(grid, options, selection)


def selection_to_data(
    grid: GridView,
    options: ExportOptions | None = None,
    selection: Selection | None = None,
) -> list[list[Any]]:
    """선택 영역의 값 배열 (헤더 행 + 본문 행, 인코딩/병합 처리 없음)"""
    window = resolve_export_window(grid, options, selection)
    columns = [o for o in range(window.count_columns()) if o not in window.ignored_columns]
    result = []

    if window.start_column_header_level is not None:
        for level in range(window.start_column_header_level, 0):
            tr = [grid.get_col_header(-1, level)] if window.with_row_headers else []
            tr.extend(grid.get_col_header(window.start_column + o, level) for o in columns)
            result.append(tr)

    if window.has_body:
        data = grid.get_data(window.start_row, window.start_column, window.end_row, window.end_column)
        for row_offset in range(window.count_rows()):
            if row_offset in window.ignored_rows:
                continue
            tr = [grid.get_row_header(window.start_row + row_offset)] if window.with_row_headers else []
            for col_offset in columns:
                value = _value_at(data, row_offset, col_offset)
                tr.append("" if value is None else value)
            result.append(tr)

    return result


def data_to_html(rows: Iterable[Iterable[Any]]) -> str:
    """2D 배열 → <table><tbody>…</tbody></table> (헤더/병합 없음)"""
    rows = [list(row) for row in rows]
    result = ["<table>"]

    if rows:
        result.append("<tbody>")
    for row in rows:
        result.append("<tr>")
        result.extend(f"<td>{encode_cell_value(value)}</td>" for value in row)
        result.append("</tr>")
    if rows:
        result.append("</tbody>")

    result.append("</table>")
    return "".join(result)
