# xgen_docx2table/core/processor/docx_helper/docx_equation_processor.py
"""
DOCX Equation Processor

Resolves an embedded OLE equation relationship to bracket-delimited LaTeX.
"""
import logging
from typing import Optional

from xgen_docx2table.core.exceptions import EquationConversionError
from xgen_docx2table.core.functions.equation_converter import (
    BaseEquationConverter,
    NullEquationConverter,
    normalize_display_math,
)
from xgen_docx2table.core.functions.resolution import ObjectReference

logger = logging.getLogger("xgen_docx2table.equation.docx")


class DOCXEquationProcessor:
    """
    Converts OLE equation objects through a pluggable converter.

    Args:
        converter: Equation converter (default: NullEquationConverter)
    """

    def __init__(self, converter: Optional[BaseEquationConverter] = None):
        self.converter = converter or NullEquationConverter()

    def resolve_reference(self, reference: ObjectReference) -> str:
        """Resolver-pool entry point: OLE relationship -> LaTeX."""
        try:
            latex = self.converter.convert(reference.read())
        except EquationConversionError:
            raise
        except Exception as e:
            raise EquationConversionError(
                f"Failed to convert equation {reference.identifier}: {e}"
            ) from e

        if latex is None:
            raise EquationConversionError(
                f"Converter returned no LaTeX for {reference.identifier}"
            )
        return normalize_display_math(latex)


__all__ = ['DOCXEquationProcessor']
