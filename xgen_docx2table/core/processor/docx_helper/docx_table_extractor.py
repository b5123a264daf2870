# xgen_docx2table/core/processor/docx_helper/docx_table_extractor.py
"""
DOCX Table Extractor

Walks DOCX tables (rows -> cells -> paragraphs -> runs) and renders every
cell as a (plain, html) pair using the completed resolution lookups.

================================================================================
EXTRACTION APPROACH: Streaming Processing
================================================================================

External Interface:
    extract_table(table, context) -> TableData
    extract_tables(doc, context) -> List[TableData]
    render_cell(cell, context) -> (plain, html)

Rules:
- One entry per physical <w:tc>. Horizontally merged cells are not
  repeated per grid column; vMerge continuation cells yield their own
  (usually empty) entry.
- Empty cells produce empty strings, never omitted entries.
- Paragraph boundaries add the line-break marker to the HTML buffer only.
- No I/O happens here: images and equations come from frozen lookups.
"""
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Tuple

from docx.table import Table, _Cell

from xgen_docx2table.core.functions.table_extractor import (
    BaseTableExtractor,
    RowData,
    TableData,
    TableExtractorConfig,
)
from xgen_docx2table.core.processor.docx_helper.docx_paragraph import render_paragraph

logger = logging.getLogger("xgen_docx2table.docx.table")


@dataclass(frozen=True)
class RenderContext:
    """Completed resolution lookups shared by every cell of a document."""
    equations: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    images: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


class DOCXTableExtractor(BaseTableExtractor):
    """
    DOCX-specific table extractor implementation.

    Usage:
        extractor = DOCXTableExtractor()
        context = RenderContext(equations=eq_values, images=img_values)
        tables = extractor.extract_tables(doc, context)
    """

    def __init__(self, config: Optional[TableExtractorConfig] = None):
        super().__init__(config)

    def supports_format(self, format_type: str) -> bool:
        return format_type.lower() == 'docx'

    def render_cell(self, cell: _Cell, context: RenderContext) -> Tuple[str, str]:
        """
        Render one cell.

        Args:
            cell: python-docx cell
            context: Resolved lookups

        Returns:
            (plain_text, html_text)
        """
        plain_parts: List[str] = []
        html_parts: List[str] = []

        paragraphs = cell.paragraphs
        last_idx = len(paragraphs) - 1
        for para_idx, paragraph in enumerate(paragraphs):
            text = render_paragraph(
                paragraph, context.equations, context.images, self.config
            )
            plain_parts.append(text)
            html_parts.append(text)

            if para_idx < last_idx:
                html_parts.append(self.config.line_break)

        return "".join(plain_parts), "".join(html_parts)

    def extract_table(self, element: Any, context: Any = None) -> TableData:
        """
        Extract a single table.

        Args:
            element: python-docx Table
            context: RenderContext (empty lookups if omitted)

        Returns:
            TableData with one RowData per <w:tr>
        """
        context = context or RenderContext()
        table: Table = element
        table_data = TableData()

        for tr in table._tbl.tr_lst:
            row_data = RowData()
            for tc in tr.tc_lst:
                plain, html = self.render_cell(_Cell(tc, table), context)
                row_data.append(plain, html)
            table_data.rows.append(row_data)

        return table_data

    def extract_tables(self, doc, context: Optional[RenderContext] = None) -> List[TableData]:
        """
        Extract every body-level table of a document, in document order.

        Args:
            doc: python-docx Document
            context: RenderContext

        Returns:
            List of TableData
        """
        tables = [self.extract_table(table, context) for table in doc.tables]
        self.logger.debug(f"Extracted {len(tables)} tables")
        return tables


__all__ = [
    'RenderContext',
    'DOCXTableExtractor',
]
