# -*- coding: utf-8 -*-
"""HTML 가져오기 - 붙여넣은 <table> → GridSettings

스프레드시트에서 복사한(또는 직접 작성한) HTML 테이블을 새 그리드에 적용할
설정으로 복원한다.

처리 순서:
  1. 원시 문자열이면 <td> 내부의 <br> 외 태그 제거 후 BeautifulSoup 파싱
  2. <meta name="Generator" content="...Excel..."> 로 Excel 방언 판정
  3. <thead> 행 → 헤더 행(td 없음) / 상단 고정 행(td 있음), <tfoot> 행 → 하단 고정 행
  4. 고정 행 + 본문 행을 행×열 행렬에 배치 (병합 칸은 None)
"""
import logging
from typing import Callable

from bs4 import BeautifulSoup, Tag

from table_clipboard.config import HTML_PARSER, MSO_IGNORE_COLSPAN
from table_clipboard.schemas import GridSettings, HeaderEntry, MergeCell, NestedHeader
from table_clipboard.utils.html_utils import (
    cell_span, decode_html_entities, inner_html, is_excel_generator,
    normalize_cell_html, normalize_excel_cell_html, normalize_input_newlines,
    strip_cell_markup,
)

logger = logging.getLogger(__name__)

# 아직 값이 배치되지 않은 칸 (None = 병합으로 가려진 칸과 구분)
_UNWRITTEN = object()

DialectPredicate = Callable[[Tag], bool]


def _is_html_table(element) -> bool:
    return isinstance(element, Tag) and element.name == "table"


def _document_root(tag: Tag) -> Tag:
    root = tag
    for parent in tag.parents:
        root = parent
    return root


def _cells(tr: Tag) -> list[Tag]:
    return tr.find_all(["td", "th"], recursive=False)


def _section_rows(section: Tag | None) -> list[Tag]:
    return section.find_all("tr", recursive=False) if section is not None else []


def _body_rows(table: Tag) -> list[Tag]:
    """<tbody> 섹션의 행 + table 바로 아래의 <tr> (암묵적 tbody), 문서 순서대로"""
    rows = []
    for child in table.find_all(["tbody", "tr"], recursive=False):
        rows.extend(_section_rows(child) if child.name == "tbody" else [child])
    return rows


def _header_text(cell: Tag) -> str:
    return decode_html_entities(normalize_cell_html(inner_html(cell)))


def _cell_text(cell: Tag, excel: bool) -> str:
    html = inner_html(cell)
    text = normalize_excel_cell_html(html) if excel else normalize_cell_html(html)
    return decode_html_entities(text)


def _first_unwritten(row: list) -> int | None:
    """행에서 아직 채워지지 않은 첫 칸 (이전 행의 병합이 차지한 칸은 건너뜀)"""
    for col, value in enumerate(row):
        if value is _UNWRITTEN:
            return col
    return None


def _header_labels(th_rows: list[Tag], has_row_headers: bool) -> dict:
    """헤더 행 1개 → colHeaders, 2개 이상 → nestedHeaders"""
    skip = 1 if has_row_headers else 0

    if len(th_rows) > 1:
        nested: list[list[HeaderEntry]] = []
        for tr in th_rows:
            level = []
            for header in _cells(tr)[skip:]:
                colspan = cell_span(header, "colspan")
                label = _header_text(header)
                level.append(NestedHeader(label=label, colspan=colspan) if colspan > 1 else label)
            nested.append(level)
        return {"nested_headers": nested}

    if th_rows:
        return {"col_headers": [_header_text(header) for header in _cells(th_rows[0])[skip:]]}

    return {}


def _build_settings(table: Tag, excel: bool) -> GridSettings:
    has_row_headers = any(
        cell.name == "th" for tr in _body_rows(table) for cell in _cells(tr)
    )
    first_row = table.find("tr")
    count_cols = 0
    if first_row is not None:
        count_cols = sum(cell_span(cell, "colspan") for cell in _cells(first_row))
        count_cols = max(count_cols - (1 if has_row_headers else 0), 0)

    fixed_rows_top, th_rows = [], []
    for tr in _section_rows(table.find("thead", recursive=False)):
        (fixed_rows_top if tr.find("td") is not None else th_rows).append(tr)
    fixed_rows_bottom = _section_rows(table.find("tfoot", recursive=False))

    data_rows = [*fixed_rows_top, *_body_rows(table), *fixed_rows_bottom]
    matrix = [[_UNWRITTEN] * count_cols for _ in data_rows]
    merge_cells: list[MergeCell] = []
    row_headers: list[str] = []

    for row, tr in enumerate(data_rows):
        for cell in _cells(tr):
            if cell.name != "td":
                row_headers.append(_header_text(cell))
                continue

            col = _first_unwritten(matrix[row])
            if col is None:
                logger.warning(f"행 {row}: 열 {count_cols}개를 넘는 셀 무시")
                continue

            rowspan = cell_span(cell, "rowspan")
            colspan = cell_span(cell, "colspan")
            if rowspan > 1 or colspan > 1:
                for covered_row in range(row, min(row + rowspan, len(matrix))):
                    for covered_col in range(col, min(col + colspan, count_cols)):
                        matrix[covered_row][covered_col] = None
                if MSO_IGNORE_COLSPAN not in (cell.get("style") or ""):
                    merge_cells.append(MergeCell(row=row, col=col, rowspan=rowspan, colspan=colspan))

            matrix[row][col] = _cell_text(cell, excel)

    data = [["" if value is _UNWRITTEN else value for value in row] for row in matrix]

    return GridSettings(
        data=data or None,
        merge_cells=merge_cells or None,
        row_headers=row_headers or None,
        fixed_rows_top=len(fixed_rows_top) or None,
        fixed_rows_bottom=len(fixed_rows_bottom) or None,
        **_header_labels(th_rows, has_row_headers),
    )


def html_to_grid_settings(
    element: str | Tag,
    *,
    is_excel_dialect: DialectPredicate | None = None,
) -> GridSettings | None:
    """HTML 문자열 또는 <table> 요소 → GridSettings.

    Args:
        element: 원시 HTML 문자열, 또는 이미 파싱된 <table> Tag
        is_excel_dialect: 문서 루트를 받아 Excel 공백/줄바꿈 방언 여부를 판정
            (기본값: Generator meta 태그 검사)

    Returns:
        테이블이 없으면 None
    """
    is_excel_dialect = is_excel_dialect or is_excel_generator
    soup = None

    if isinstance(element, str):
        markup = strip_cell_markup(normalize_input_newlines(element))
        soup = BeautifulSoup(markup, HTML_PARSER)
        table = soup.find("table")
    else:
        table = element

    try:
        if not _is_html_table(table):
            logger.debug("HTML에 <table> 없음 - 가져오기 생략")
            return None

        excel = is_excel_dialect(soup if soup is not None else _document_root(table))
        settings = _build_settings(table, excel)
        logger.debug(
            f"HTML 가져오기: 행 {len(settings.data or [])}개, "
            f"병합 {len(settings.merge_cells or [])}개, Excel 방언={excel}"
        )
        return settings
    finally:
        if soup is not None:
            soup.decompose()
