# xgen_docx2table/core/processor/docx_helper/__init__.py
"""
DOCX Helper Module

Utility modules for DOCX table extraction.

Module structure:
- docx_constants: Constants and Enum (RunKind, NAMESPACES, EMU_PER_PIXEL)
- docx_file_converter: bytes -> python-docx Document (DOCXFileConverter)
- docx_references: Reference collection (collect_references)
- docx_image_processor: Image relationship -> URI (DOCXImageProcessor)
- docx_equation_processor: OLE relationship -> LaTeX (DOCXEquationProcessor)
- docx_paragraph: Run classification and paragraph rendering
- docx_table_extractor: Cell rendering and table walking (DOCXTableExtractor)
"""

# Constants
from xgen_docx2table.core.processor.docx_helper.docx_constants import (
    RunKind,
    NAMESPACES,
    EMU_PER_PIXEL,
)

# File converter
from xgen_docx2table.core.processor.docx_helper.docx_file_converter import (
    DOCXFileConverter,
)

# Reference collector
from xgen_docx2table.core.processor.docx_helper.docx_references import (
    collect_references,
)

# Resolvers
from xgen_docx2table.core.processor.docx_helper.docx_image_processor import (
    DOCXImageProcessor,
)
from xgen_docx2table.core.processor.docx_helper.docx_equation_processor import (
    DOCXEquationProcessor,
)

# Paragraph
from xgen_docx2table.core.processor.docx_helper.docx_paragraph import (
    InlineImage,
    EmbeddedObject,
    iter_run_elements,
    classify_run,
    render_run,
    render_paragraph,
)

# Table Extractor
from xgen_docx2table.core.processor.docx_helper.docx_table_extractor import (
    RenderContext,
    DOCXTableExtractor,
)


__all__ = [
    # Constants
    'RunKind',
    'NAMESPACES',
    'EMU_PER_PIXEL',
    # File converter
    'DOCXFileConverter',
    # Reference collector
    'collect_references',
    # Resolvers
    'DOCXImageProcessor',
    'DOCXEquationProcessor',
    # Paragraph
    'InlineImage',
    'EmbeddedObject',
    'iter_run_elements',
    'classify_run',
    'render_run',
    'render_paragraph',
    # Table Extractor
    'RenderContext',
    'DOCXTableExtractor',
]
