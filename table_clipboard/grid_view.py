"""그리드 읽기 전용 인터페이스 & 메모리 기반 구현

코덱은 GridView 메서드만 호출하고 그리드를 변경하지 않는다.
InMemoryGrid는 2D 리스트(또는 가져오기 결과 GridSettings)로 만든 구현체.
"""
from __future__ import annotations

from typing import Any, Mapping, Protocol, Sequence

from table_clipboard.schemas import GridSettings, MergeCell, NestedHeader

Selection = tuple[int, int, int, int]


class GridView(Protocol):
    """내보내기가 사용하는 그리드 접근자"""

    def count_rows(self) -> int: ...

    def count_cols(self) -> int: ...

    def has_row_headers(self) -> bool: ...

    def has_col_headers(self) -> bool: ...

    def count_column_headers(self) -> int: ...

    def get_data(self, start_row: int, start_col: int, end_row: int, end_col: int) -> list[list[Any]]: ...

    def get_cell_meta(self, row: int, col: int) -> Mapping[str, Any]: ...

    def get_col_header(self, col: int, level: int = -1) -> Any: ...

    def get_row_header(self, row: int) -> Any: ...

    def get_cell(self, row: int, col: int) -> Mapping[str, Any] | None: ...

    def get_selected_last(self) -> Selection | None: ...


class InMemoryGrid:
    """리스트 기반 GridView 구현.

    Args:
        data: 행×열 값 (행 길이가 달라도 됨, 부족한 칸은 None)
        col_headers: 1단 열 헤더
        nested_headers: 다단 열 헤더 (위→아래 순, 항목은 라벨 또는 {label, colspan})
        row_headers: 행 헤더 라벨
        merge_cells: 병합 기록 ({row, col, rowspan, colspan})
        corner_label: 행 헤더 × 열 헤더 교차 칸 라벨
        selection: 마지막 선택 영역 (r1, c1, r2, c2)
    """

    def __init__(
        self,
        data: Sequence[Sequence[Any]] | None = None,
        *,
        col_headers: Sequence[Any] | None = None,
        nested_headers: Sequence[Sequence[Any]] | None = None,
        row_headers: Sequence[Any] | None = None,
        merge_cells: Sequence[MergeCell | Mapping[str, int]] | None = None,
        corner_label: str = "",
        selection: Selection | None = None,
    ):
        self.data = [list(row) for row in data or []]
        self.col_headers = list(col_headers) if col_headers is not None else None
        self.nested_headers = [list(level) for level in nested_headers] if nested_headers else None
        self.row_headers = list(row_headers) if row_headers is not None else None
        self.corner_label = corner_label
        self.selection = selection
        self._cell_meta: dict[tuple[int, int], dict[str, Any]] = {}
        # (level, col) → 라벨 / 시작 열의 colspan
        self._header_labels: dict[tuple[int, int], Any] = {}
        self._header_spans: dict[tuple[int, int], int] = {}

        for merge in merge_cells or []:
            self.merge(MergeCell.model_validate(merge))
        self._index_nested_headers()

    @classmethod
    def from_settings(cls, settings: GridSettings | Mapping[str, Any], **kwargs) -> "InMemoryGrid":
        """가져오기 결과(GridSettings 또는 camelCase 딕셔너리)로 새 그리드 생성"""
        if not isinstance(settings, GridSettings):
            settings = GridSettings.model_validate(settings)
        return cls(
            settings.data or [],
            col_headers=settings.col_headers,
            nested_headers=settings.nested_headers,
            row_headers=settings.row_headers,
            merge_cells=settings.merge_cells,
            **kwargs,
        )

    def merge(self, merge: MergeCell) -> None:
        """병합 영역의 시작 칸에 span, 나머지 칸에 hidden 메타 기록"""
        for row in range(merge.row, merge.row + merge.rowspan):
            for col in range(merge.col, merge.col + merge.colspan):
                meta = self._cell_meta.setdefault((row, col), {})
                if (row, col) == (merge.row, merge.col):
                    meta["rowspan"] = merge.rowspan
                    meta["colspan"] = merge.colspan
                else:
                    meta["hidden"] = True

    def _index_nested_headers(self) -> None:
        if not self.nested_headers:
            return
        levels = len(self.nested_headers)
        for index, entries in enumerate(self.nested_headers):
            level = index - levels
            col = 0
            for entry in entries:
                if isinstance(entry, NestedHeader):
                    label, colspan = entry.label, entry.colspan
                elif isinstance(entry, Mapping):
                    label, colspan = entry.get("label", ""), int(entry.get("colspan", 1))
                else:
                    label, colspan = entry, 1
                if colspan > 1:
                    self._header_spans[(level, col)] = colspan
                for covered in range(col, col + colspan):
                    self._header_labels[(level, covered)] = label
                col += colspan

    # ─── GridView ────────────────────────────────────────────
    def count_rows(self) -> int:
        return len(self.data)

    def count_cols(self) -> int:
        widest = max((len(row) for row in self.data), default=0)
        if widest == 0 and self.col_headers is not None:
            return len(self.col_headers)
        return widest

    def has_row_headers(self) -> bool:
        return self.row_headers is not None

    def has_col_headers(self) -> bool:
        return self.count_column_headers() > 0

    def count_column_headers(self) -> int:
        if self.nested_headers:
            return len(self.nested_headers)
        return 1 if self.col_headers is not None else 0

    def get_data(self, start_row: int, start_col: int, end_row: int, end_col: int) -> list[list[Any]]:
        result = []
        for row in range(start_row, end_row + 1):
            values = self.data[row] if 0 <= row < len(self.data) else []
            result.append([values[col] if 0 <= col < len(values) else None
                           for col in range(start_col, end_col + 1)])
        return result

    def get_cell_meta(self, row: int, col: int) -> Mapping[str, Any]:
        return {"hidden": False, "rowspan": None, "colspan": None, **self._cell_meta.get((row, col), {})}

    def get_col_header(self, col: int, level: int = -1) -> Any:
        if col == -1:
            return self.corner_label
        if self.nested_headers:
            return self._header_labels.get((level, col), "")
        if self.col_headers is not None and level == -1 and 0 <= col < len(self.col_headers):
            return self.col_headers[col]
        return ""

    def get_row_header(self, row: int) -> Any:
        if self.row_headers is not None and 0 <= row < len(self.row_headers):
            return self.row_headers[row]
        return ""

    def get_cell(self, row: int, col: int) -> Mapping[str, Any] | None:
        """렌더링된 셀의 속성 (헤더 단은 colspan만 의미 있음)"""
        colspan = self._header_spans.get((row, col)) if row < 0 else None
        return {"colspan": str(colspan)} if colspan else {}

    def get_selected_last(self) -> Selection | None:
        return self.selection

    def select(self, start_row: int, start_col: int, end_row: int, end_col: int) -> None:
        self.selection = (start_row, start_col, end_row, end_col)
