# xgen_docx2table/core/functions/file_converter.py
"""
BaseFileConverter - Abstract base class for file format conversion

Defines the interface for turning raw binary input into the object model the
handler walks (for DOCX: a python-docx Document).

This is the FIRST step in the processing pipeline:
    Binary Data -> FileConverter -> Document -> Reference Collector -> ...

Usage:
    class DOCXFileConverter(BaseFileConverter):
        def convert(self, file_data: bytes, file_stream: BinaryIO) -> Any:
            from docx import Document
            return Document(file_stream or BytesIO(file_data))

        def get_format_name(self) -> str:
            return "DOCX Document"
"""
from abc import ABC, abstractmethod
from typing import Any, Optional, BinaryIO


class BaseFileConverter(ABC):
    """
    Abstract base class for file format converters.

    Subclasses must implement:
    - convert(): Convert binary data to workable format
    - get_format_name(): Return human-readable format name
    """

    @abstractmethod
    def convert(
        self,
        file_data: bytes,
        file_stream: Optional[BinaryIO] = None,
        **kwargs
    ) -> Any:
        """
        Convert binary file data to a workable format.

        Args:
            file_data: Raw binary file data
            file_stream: Optional file stream (BytesIO) for libraries that prefer streams
            **kwargs: Additional format-specific options

        Returns:
            Format-specific object

        Raises:
            DocumentOpenError: If conversion fails
        """
        pass

    @abstractmethod
    def get_format_name(self) -> str:
        """Return human-readable format name (e.g., "DOCX Document")."""
        pass

    def validate(self, file_data: bytes) -> bool:
        """
        Validate if the file data can be converted by this converter.

        Default implementation returns True.
        """
        return True


__all__ = ["BaseFileConverter"]
