# xgen_docx2table/__init__.py
"""
xgen_docx2table Library

Extracts the tables of Word (.docx) documents as plain text and HTML, with
embedded images replaced by hosted URIs and embedded equations by LaTeX.

Package Structure:
- core: Table extraction core module
    - WordTableProcessor: Main table extraction class
    - processor: Format handlers (DOCX)
    - functions: Resolution pool, image upload, equation conversion

Usage:
    from xgen_docx2table import WordTableProcessor

    processor = WordTableProcessor()
    result = processor.open("document.docx")
    for table in result.tables:
        for row in table.rows:
            print(row.content)
"""

__version__ = "0.1.0"

# Expose core classes at top level
from xgen_docx2table.core import (
    WordTableProcessor,
    open_document,
    read_document,
    DocumentOpenError,
    ResolutionError,
)
from xgen_docx2table.core.functions.table_extractor import (
    RowData,
    TableData,
    WordTables,
)

# Explicit subpackages
from xgen_docx2table import core

__all__ = [
    "__version__",
    # Core classes
    "WordTableProcessor",
    "open_document",
    "read_document",
    # Results
    "RowData",
    "TableData",
    "WordTables",
    # Errors
    "DocumentOpenError",
    "ResolutionError",
    # Subpackages
    "core",
]
