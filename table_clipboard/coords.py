"""좌표 해석기 - 선택 영역 + 내보내기 옵션 → ExportWindow

선택 영역의 모서리 순서는 임의이며 min/max로 정규화한다. 범위를 벗어난
좌표는 거부하지 않고 잘라낸다 (빈 창이면 '<table></table>' 이 된다).
"""
import logging

from table_clipboard.grid_view import GridView, Selection
from table_clipboard.schemas import ExportOptions, ExportWindow

logger = logging.getLogger(__name__)


def _clamp_end(start: int, end: int, last: int, limit: int | None) -> int:
    end = min(end, last)
    if limit is not None:
        end = min(end, start + limit - 1)
    return end


def resolve_export_window(
    grid: GridView,
    options: ExportOptions | None = None,
    selection: Selection | None = None,
) -> ExportWindow:
    """선택 영역을 내보낼 좌표 창으로 확정.

    selection이 없으면 grid.get_selected_last(), 그것도 없으면 본문 전체.
    시작 행이 정확히 -1(헤더 행)일 때만 행 헤더 열을 포함한다.
    """
    options = options or ExportOptions()
    if selection is None:
        selection = grid.get_selected_last()
    if selection is None:
        selection = (0, 0, grid.count_rows() - 1, grid.count_cols() - 1)

    r1, c1, r2, c2 = selection
    start_row, end_row = min(r1, r2), max(r1, r2)
    start_column, end_column = min(c1, c2), max(c1, c2)

    # 열 범위는 헤더 포함 여부와 관계없이 0 이상 (헤더는 음수 단으로 따로 표현)
    last_column = max(grid.count_cols() - 1, 0)
    start_column = min(max(start_column, 0), last_column)
    end_column = _clamp_end(start_column, max(end_column, 0), last_column, options.columns_limit)

    window = {
        "start_column": start_column,
        "end_column": end_column,
        "rows_limit": options.rows_limit,
        "columns_limit": options.columns_limit,
        "ignored_rows": options.ignored_rows,
        "ignored_columns": options.ignored_columns,
    }

    header_levels = options.column_headers_count
    if header_levels is None:
        header_levels = grid.count_column_headers()
    if options.with_column_headers and header_levels > 0:
        window["start_column_header_level"] = -1 if options.only_first_level else -header_levels

    if options.with_row_headers and start_row == -1:
        window["start_row_header"] = -1

    if options.with_cells and end_row >= 0 and grid.count_rows() > 0 and grid.count_cols() > 0:
        body_start = max(start_row, 0)
        body_end = _clamp_end(body_start, end_row, grid.count_rows() - 1, options.rows_limit)
        if body_start <= body_end:
            window["start_row"] = body_start
            window["end_row"] = body_end

    resolved = ExportWindow(**window)
    logger.debug(f"선택 {selection} → 창 {resolved}")
    return resolved
