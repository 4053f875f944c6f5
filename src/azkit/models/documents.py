"""Document Analysis result models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from azkit.models._base import ExpandableEnum, RestModel, wire_field


class OperationStatus(ExpandableEnum):
    NOT_STARTED = "notStarted"
    RUNNING = "running"
    FAILED = "failed"
    SUCCEEDED = "succeeded"
    CANCELED = "canceled"


class DocumentTableCellKind(ExpandableEnum):
    CONTENT = "content"
    ROW_HEADER = "rowHeader"
    COLUMN_HEADER = "columnHeader"
    STUB_HEAD = "stubHead"
    DESCRIPTION = "description"


class DocumentSpan(RestModel):
    """Contiguous region of the concatenated content of a document."""

    offset: int | None = wire_field(required=True)
    length: int | None = wire_field(required=True)


class BoundingRegion(RestModel):
    """A polygon on a specific 1-based page."""

    page_number: int | None = wire_field(required=True)
    polygon: list[float] | None = None


class DocumentTableCell(RestModel):
    kind: DocumentTableCellKind | None = None
    row_index: int | None = wire_field(required=True)
    column_index: int | None = wire_field(required=True)
    row_span: int | None = None
    column_span: int | None = None
    content: str | None = wire_field(required=True)
    bounding_regions: list[BoundingRegion] | None = None
    spans: list[DocumentSpan] | None = wire_field(required=True)


class DocumentTable(RestModel):
    """A table object consisting of table cells arranged in a rectangular layout."""

    row_count: int | None = wire_field(required=True)
    column_count: int | None = wire_field(required=True)
    cells: list[DocumentTableCell] | None = wire_field(required=True)
    bounding_regions: list[BoundingRegion] | None = None
    spans: list[DocumentSpan] | None = wire_field(required=True)

    def to_rows(self) -> list[list[str | None]]:
        """Lay the cells out in a ``row_count`` x ``column_count`` grid.

        A cell spanning several rows or columns fills every slot it covers.
        Slots no cell covers are ``None``.
        """
        rows = self.row_count or 0
        cols = self.column_count or 0
        grid: list[list[str | None]] = [[None] * cols for _ in range(rows)]
        for cell in self.cells or []:
            if cell.row_index is None or cell.column_index is None:
                continue
            row_end = min(cell.row_index + (cell.row_span or 1), rows)
            col_end = min(cell.column_index + (cell.column_span or 1), cols)
            for r in range(cell.row_index, row_end):
                for c in range(cell.column_index, col_end):
                    grid[r][c] = cell.content
        return grid


class DocumentPage(RestModel):
    page_number: int | None = wire_field(required=True)
    angle: float | None = None
    width: float | None = None
    height: float | None = None
    unit: str | None = None
    spans: list[DocumentSpan] | None = wire_field(required=True)


class DocumentKeyValueElement(RestModel):
    content: str | None = wire_field(required=True)
    bounding_regions: list[BoundingRegion] | None = None
    spans: list[DocumentSpan] | None = wire_field(required=True)


class DocumentKeyValuePair(RestModel):
    key: DocumentKeyValueElement | None = wire_field(required=True)
    value: DocumentKeyValueElement | None = None
    confidence: float | None = wire_field(required=True)


class AnalyzeResult(RestModel):
    api_version: str | None = wire_field(required=True)
    model_id: str | None = wire_field(required=True)
    content: str | None = wire_field(required=True)
    pages: list[DocumentPage] | None = None
    tables: list[DocumentTable] | None = None
    key_value_pairs: list[DocumentKeyValuePair] | None = None
    documents: list[dict[str, Any]] | None = None


class AnalyzeResultOperation(RestModel):
    """Status body returned while polling an analyze operation."""

    status: OperationStatus | None = wire_field(required=True)
    created_date_time: datetime | None = wire_field(required=True)
    last_updated_date_time: datetime | None = wire_field(required=True)
    error: dict[str, Any] | None = None
    analyze_result: AnalyzeResult | None = None
