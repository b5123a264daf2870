# xgen_docx2table/core/processor/docx_helper/docx_constants.py
"""
DOCX constants and type definitions

- RunKind: classification of a run inside a table cell
- NAMESPACES: OOXML namespaces used by the run/table walkers
- EMU_PER_PIXEL: drawing extent conversion factor
"""
from enum import Enum


class RunKind(Enum):
    """Run classification"""
    TEXT = "text"
    IMAGE = "image"
    EQUATION = "equation"


# === OOXML namespaces ===

NAMESPACES = {
    'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main',
    'wp': 'http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing',
    'a': 'http://schemas.openxmlformats.org/drawingml/2006/main',
    'pic': 'http://schemas.openxmlformats.org/drawingml/2006/picture',
    'r': 'http://schemas.openxmlformats.org/officeDocument/2006/relationships',
    'o': 'urn:schemas-microsoft-com:office:office',
    'v': 'urn:schemas-microsoft-com:vml',
}

# 914400 EMU per inch / 96 px per inch
EMU_PER_PIXEL = 9525


__all__ = [
    'RunKind',
    'NAMESPACES',
    'EMU_PER_PIXEL',
]
