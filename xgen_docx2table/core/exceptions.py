# xgen_docx2table/core/exceptions.py
"""
Exceptions raised by the table extraction pipeline.

- DocumentOpenError: input is not a readable DOCX package (fatal)
- ResolutionError: an embedded object could not be converted/uploaded
- EquationConversionError / UploadError: resolver-specific failures
"""
from typing import Dict, Optional


class Docx2TableError(Exception):
    """Base class for all library errors."""


class DocumentOpenError(Docx2TableError):
    """The input cannot be parsed as a DOCX document package."""


class ResolutionError(Docx2TableError):
    """
    Resolution of one or more embedded objects failed.

    Attributes:
        failures: Mapping of relationship id -> error message. Empty when the
                  error describes a single identifier raised from a resolver.
    """

    def __init__(self, message: str, failures: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.failures: Dict[str, str] = dict(failures or {})


class EquationConversionError(ResolutionError):
    """An embedded equation object could not be converted to LaTeX."""


class UploadError(ResolutionError):
    """An embedded image could not be uploaded to the storage backend."""


__all__ = [
    "Docx2TableError",
    "DocumentOpenError",
    "ResolutionError",
    "EquationConversionError",
    "UploadError",
]
