# xgen_docx2table/core/processor/__init__.py
"""
Processor - Format-specific table handlers

- base_handler: BaseHandler (config, image processor, lazy components)
- docx_handler: DOCXHandler (DOCX tables with resolved images/equations)
- docx_helper/: DOCX building blocks
"""
from xgen_docx2table.core.processor.base_handler import BaseHandler
from xgen_docx2table.core.processor.docx_handler import DOCXHandler

__all__ = [
    "BaseHandler",
    "DOCXHandler",
]
