# -*- coding: utf-8 -*-
"""Pydantic 스키마: 내보내기 옵션/좌표 창 & 가져오기 결과(그리드 설정)

내보내기는 ExportOptions → ExportWindow 로 좌표를 확정한 뒤 HTML을 만들고,
가져오기는 HTML 테이블을 GridSettings 하나로 돌려준다.
"""
from __future__ import annotations
from typing import Any
from pydantic import BaseModel, ConfigDict, Field


# ─── 내보내기 옵션 ────────────────────────────────────────────
class ExportOptions(BaseModel):
    """복사(내보내기) 동작 플래그"""
    with_cells: bool = Field(default=True, description="본문 셀 포함 여부")
    with_column_headers: bool = Field(default=False, description="열 헤더 포함 여부")
    with_row_headers: bool = Field(default=False, description="행 헤더 포함 여부")
    only_first_level: bool = Field(default=False, description="다단 헤더 중 데이터에 가장 가까운 1단만")
    column_headers_count: int | None = Field(
        None, ge=0, description="열 헤더 단수 (None이면 그리드에서 조회)"
    )
    rows_limit: int | None = Field(None, ge=1, description="최대 행 수 (None = 무제한)")
    columns_limit: int | None = Field(None, ge=1, description="최대 열 수 (None = 무제한)")
    ignored_rows: frozenset[int] = Field(default_factory=frozenset, description="제외할 행 (창 기준 오프셋)")
    ignored_columns: frozenset[int] = Field(default_factory=frozenset, description="제외할 열 (창 기준 오프셋)")


class ExportWindow(BaseModel):
    """확정된 내보내기 좌표 창 (양 끝 포함, 0-based)

    음수 인덱스는 헤더 영역: -1 = 데이터에 가장 가까운 헤더 단.
    """
    start_row: int | None = Field(None, description="본문 시작 행 (None이면 본문 없음)")
    end_row: int | None = Field(None, description="본문 끝 행")
    start_column: int = Field(default=0, ge=0)
    end_column: int = Field(default=0, ge=0)
    start_column_header_level: int | None = Field(None, lt=0, description="열 헤더 시작 단 (음수)")
    start_row_header: int | None = Field(None, description="-1이면 행 헤더 열 포함")
    rows_limit: int | None = None
    columns_limit: int | None = None
    ignored_rows: frozenset[int] = Field(default_factory=frozenset)
    ignored_columns: frozenset[int] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @property
    def has_body(self) -> bool:
        return self.start_row is not None and self.end_row is not None

    @property
    def with_row_headers(self) -> bool:
        return self.start_row_header == -1

    def count_rows(self) -> int:
        """창 안의 본문 행 수 (rows_limit 반영)"""
        if not self.has_body:
            return 0
        count = self.end_row - self.start_row + 1
        return min(count, self.rows_limit) if self.rows_limit is not None else count

    def count_columns(self) -> int:
        """창 안의 열 수 (columns_limit 반영)"""
        count = self.end_column - self.start_column + 1
        return min(count, self.columns_limit) if self.columns_limit is not None else count


# ─── 가져오기 결과 ────────────────────────────────────────────
class MergeCell(BaseModel):
    """병합 셀 기록 (0-based 시작 좌표 + 크기)"""
    row: int = Field(..., ge=0)
    col: int = Field(..., ge=0)
    rowspan: int = Field(..., ge=1)
    colspan: int = Field(..., ge=1)


class NestedHeader(BaseModel):
    """다단 헤더 항목 (colspan > 1 인 경우만 객체로 표현)"""
    label: str | int | float
    colspan: int = Field(..., ge=1)


# 라벨은 숫자일 수도 있다 (연도, 순번 등)
HeaderEntry = NestedHeader | str | int | float


class GridSettings(BaseModel):
    """HTML 테이블에서 복원한 그리드 설정 (새 그리드 인스턴스에 적용할 값)

    data 안의 None은 병합으로 가려진 칸을 뜻한다.
    """
    data: list[list[Any]] | None = Field(None, description="행×열 값 배열")
    merge_cells: list[MergeCell] | None = Field(None, alias="mergeCells")
    col_headers: list[Any] | None = Field(None, alias="colHeaders")
    nested_headers: list[list[HeaderEntry]] | None = Field(None, alias="nestedHeaders")
    row_headers: list[Any] | None = Field(None, alias="rowHeaders")
    fixed_rows_top: int | None = Field(None, ge=1, alias="fixedRowsTop")
    fixed_rows_bottom: int | None = Field(None, ge=1, alias="fixedRowsBottom")

    model_config = ConfigDict(populate_by_name=True)

    def to_settings(self) -> dict:
        """설정 딕셔너리 (camelCase 키, 없는 항목은 생략)"""
        dumped = self.model_dump(by_alias=True)
        return {key: value for key, value in dumped.items() if value is not None}
