"""HTML <table> ↔ 그리드 클립보드 코덱"""
from table_clipboard.coords import resolve_export_window
from table_clipboard.exporter import (
    data_to_html, instance_to_html, selection_to_data, selection_to_html, table_by_coords,
)
from table_clipboard.grid_view import GridView, InMemoryGrid
from table_clipboard.importer import html_to_grid_settings
from table_clipboard.schemas import ExportOptions, ExportWindow, GridSettings, MergeCell, NestedHeader

__all__ = [
    "ExportOptions", "ExportWindow", "GridSettings", "GridView", "InMemoryGrid",
    "MergeCell", "NestedHeader", "data_to_html", "html_to_grid_settings",
    "instance_to_html", "resolve_export_window", "selection_to_data",
    "selection_to_html", "table_by_coords",
]
