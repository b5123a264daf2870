# xgen_docx2table/core/functions/equation_converter.py
"""
Equation Converter Module

Converts embedded equation objects (OLE "Equation.3" / MathType payloads)
into LaTeX markup. The actual MTEF -> LaTeX translation is supplied by the
caller; this module handles the OLE container and delimiter normalization.

Converters:
- NullEquationConverter: default, always fails (equations degrade to the placeholder)
- CallableEquationConverter: wraps any ``bytes -> str`` function
- MTEFEquationConverter: unwraps the "Equation Native" stream with olefile
  and passes the MTEF payload to a ``bytes -> str`` function

Usage Example:
    from xgen_docx2table.core.functions.equation_converter import MTEFEquationConverter

    converter = MTEFEquationConverter(mtef_to_latex)
    latex = normalize_display_math(converter.convert(ole_bytes))
"""
import io
import logging
import struct
from abc import ABC, abstractmethod
from typing import Callable

import olefile

from xgen_docx2table.core.exceptions import EquationConversionError

logger = logging.getLogger("xgen_docx2table.equation")

DISPLAY_MATH_DELIMITER = "$$"
EQUATION_NATIVE_STREAM = "Equation Native"


def normalize_display_math(latex: str) -> str:
    """
    Replace the first two ``$$`` delimiters with ``[`` and ``]``.

    >>> normalize_display_math("$$x^2$$")
    '[x^2]'
    """
    latex = latex.replace(DISPLAY_MATH_DELIMITER, "[", 1)
    latex = latex.replace(DISPLAY_MATH_DELIMITER, "]", 1)
    return latex


class BaseEquationConverter(ABC):
    """
    Abstract base class for equation converters.

    convert() may raise; the resolver pool records the failure and stores
    the placeholder for that relationship id.
    """

    @abstractmethod
    def convert(self, data: bytes) -> str:
        """
        Convert an embedded equation object to LaTeX.

        Args:
            data: Raw bytes of the embedded object part

        Returns:
            LaTeX string (usually ``$$``-delimited)
        """
        pass


class NullEquationConverter(BaseEquationConverter):
    """Used when no converter is configured."""

    def convert(self, data: bytes) -> str:
        raise EquationConversionError("no equation converter configured")


class CallableEquationConverter(BaseEquationConverter):
    """
    Adapter for plain functions.

    Args:
        func: ``bytes -> str`` conversion function
    """

    def __init__(self, func: Callable[[bytes], str]):
        self._func = func

    def convert(self, data: bytes) -> str:
        return self._func(data)


class MTEFEquationConverter(BaseEquationConverter):
    """
    Equation Editor 3.0 / MathType objects stored as OLE compound files.

    The "Equation Native" stream starts with an EQNOLEFILEHDR whose first
    uint32 is the header length; the MTEF payload follows it.

    Args:
        mtef_to_latex: ``bytes -> str`` MTEF translation function
    """

    def __init__(self, mtef_to_latex: Callable[[bytes], str]):
        self._mtef_to_latex = mtef_to_latex

    def extract_mtef(self, data: bytes) -> bytes:
        """Return the MTEF payload of an OLE equation object."""
        if not olefile.isOleFile(io.BytesIO(data)):
            raise EquationConversionError("embedded object is not an OLE compound file")

        ole = olefile.OleFileIO(io.BytesIO(data))
        try:
            if not ole.exists(EQUATION_NATIVE_STREAM):
                raise EquationConversionError(
                    f"OLE object has no '{EQUATION_NATIVE_STREAM}' stream"
                )
            native = ole.openstream(EQUATION_NATIVE_STREAM).read()
        finally:
            ole.close()

        if len(native) < 4:
            raise EquationConversionError("truncated equation header")
        header_size = struct.unpack_from('<I', native, 0)[0]
        if header_size >= len(native):
            raise EquationConversionError("equation header exceeds stream size")
        return native[header_size:]

    def convert(self, data: bytes) -> str:
        mtef = self.extract_mtef(data)
        logger.debug(f"MTEF payload: {len(mtef)} bytes")
        return self._mtef_to_latex(mtef)


__all__ = [
    "BaseEquationConverter",
    "NullEquationConverter",
    "CallableEquationConverter",
    "MTEFEquationConverter",
    "normalize_display_math",
    "DISPLAY_MATH_DELIMITER",
]
