# xgen_docx2table/core/functions/table_extractor.py
"""
Table Extractor - Abstract Interface for Table Extraction

Provides the result data structures and the base class for format-specific
table extractors.

================================================================================
EXTRACTION APPROACH: Streaming Processing
================================================================================
Method: extract_table(element, context) -> TableData

  - Extracts a SINGLE table from an element/node
  - Called in document order while tables are traversed
  - Every row and every cell is kept (empty cells become empty strings)

Implemented By:
  - DOCXTableExtractor (xgen_docx2table.core.processor.docx_helper)

================================================================================
MODULE COMPONENTS
================================================================================

- RowData: Parallel plain / HTML cell buffers of one row
- TableData: Ordered rows of one table
- WordTables: Tables of a document plus its resolution lookups
- TableExtractorConfig: Markup and placeholder settings
- BaseTableExtractor: Abstract base class for format-specific extractors
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

logger = logging.getLogger("xgen_docx2table.table")

DEFAULT_IMAGE_TAG = "<img src='{uri}' style='width:{width};height:{height}'/>"
DEFAULT_LINE_BREAK = "<br/>"


@dataclass
class RowData:
    """One table row.

    Attributes:
        content: Plain text of each cell, in column order
        html_content: HTML text of each cell, in column order
    """
    content: List[str] = field(default_factory=list)
    html_content: List[str] = field(default_factory=list)

    def append(self, plain: str, html: str) -> None:
        self.content.append(plain)
        self.html_content.append(html)

    @property
    def cells(self) -> List[Tuple[str, str]]:
        """(plain, html) pair per cell."""
        return list(zip(self.content, self.html_content))

    def __len__(self) -> int:
        return len(self.content)


@dataclass
class TableData:
    """Data class for table information.

    Attributes:
        rows: Ordered RowData, one per document row
    """
    rows: List[RowData] = field(default_factory=list)

    @property
    def num_rows(self) -> int:
        return len(self.rows)

    @property
    def num_cols(self) -> int:
        return max((len(row) for row in self.rows), default=0)

    def to_list(self) -> List[List[Dict[str, str]]]:
        return [
            [{"text": plain, "html": html} for plain, html in row.cells]
            for row in self.rows
        ]


@dataclass
class WordTables:
    """Extraction result of one document.

    Attributes:
        tables: Ordered TableData, one per body-level table
        equations: Resolved relationship id -> LaTeX (read-only)
        images: Resolved relationship id -> hosted URI (read-only)
        failures: relationship id -> error message for degraded objects
        source: Source file path, when known
    """
    tables: List[TableData] = field(default_factory=list)
    equations: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    images: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    failures: Dict[str, str] = field(default_factory=dict)
    source: Optional[str] = None

    @property
    def ok(self) -> bool:
        """True when every embedded object resolved."""
        return not self.failures

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        return {
            "source": self.source,
            "tables": [table.to_list() for table in self.tables],
            "equations": dict(self.equations),
            "images": dict(self.images),
            "failures": dict(self.failures),
        }


@dataclass
class TableExtractorConfig:
    """Configuration for table extraction.

    Attributes:
        line_break: Marker appended to the HTML buffer between paragraphs
        image_tag_template: Format string with {uri}, {width}, {height}
        placeholder: Text used when a referenced object has no resolved value
    """
    line_break: str = DEFAULT_LINE_BREAK
    image_tag_template: str = DEFAULT_IMAGE_TAG
    placeholder: str = ""


class BaseTableExtractor(ABC):
    """Abstract base class for format-specific table extractors.

    Subclasses implement extract_table() for a single table element. The
    extractor only reads the completed resolution lookups; it never
    performs I/O.
    """

    def __init__(self, config: TableExtractorConfig = None):
        """Initialize the extractor.

        Args:
            config: Table extraction configuration
        """
        self.config = config or TableExtractorConfig()
        self.logger = logging.getLogger(f"xgen_docx2table.table.{self.__class__.__name__}")

    @abstractmethod
    def extract_table(self, element: Any, context: Any = None) -> TableData:
        """Extract a single table from an element/node.

        Args:
            element: Table element/node (format-specific)
            context: Optional context object for additional information

        Returns:
            TableData object
        """
        pass

    def supports_format(self, format_type: str) -> bool:
        """Check if this extractor supports the given format."""
        return False


__all__ = [
    'RowData',
    'TableData',
    'WordTables',
    'TableExtractorConfig',
    'BaseTableExtractor',
    'DEFAULT_IMAGE_TAG',
    'DEFAULT_LINE_BREAK',
]
