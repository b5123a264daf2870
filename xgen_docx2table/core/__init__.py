# xgen_docx2table/core/__init__.py
"""
Core - Table Extraction Core Module

Module Structure:
- table_processor: Main WordTableProcessor class
- exceptions: Library exceptions
- processor/: Format-specific handlers
    - docx_handler: DOCX table extraction
- functions/: Building blocks
    - resolution: Concurrent resolve-once pool
    - img_processor: Image upload (ImageProcessor class)
    - equation_converter: Equation -> LaTeX converters
    - storage_backend: Upload backends

Usage:
    from xgen_docx2table import WordTableProcessor
    from xgen_docx2table.core.processor import DOCXHandler
    from xgen_docx2table.core.functions import ImageProcessor, ResolverPool
"""

# === Main Class ===
from xgen_docx2table.core.table_processor import (
    CurrentFile,
    WordTableProcessor,
    open_document,
    read_document,
)

# === Exceptions ===
from xgen_docx2table.core.exceptions import (
    Docx2TableError,
    DocumentOpenError,
    ResolutionError,
    EquationConversionError,
    UploadError,
)

# === Explicit Subpackage Imports ===
from xgen_docx2table.core import processor
from xgen_docx2table.core import functions

__all__ = [
    # Main Class
    "CurrentFile",
    "WordTableProcessor",
    "open_document",
    "read_document",
    # Exceptions
    "Docx2TableError",
    "DocumentOpenError",
    "ResolutionError",
    "EquationConversionError",
    "UploadError",
    # Subpackages
    "processor",
    "functions",
]
