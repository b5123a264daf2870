# xgen_docx2table/core/processor/docx_helper/docx_file_converter.py
"""
DOCXFileConverter - DOCX file format converter

Converts binary DOCX data to python-docx Document object.
"""
import logging
from io import BytesIO
from typing import Any, Optional, BinaryIO
import zipfile

from xgen_docx2table.core.exceptions import DocumentOpenError
from xgen_docx2table.core.functions.file_converter import BaseFileConverter

logger = logging.getLogger("xgen_docx2table.docx.converter")


class DOCXFileConverter(BaseFileConverter):
    """
    DOCX file converter using python-docx.

    Converts binary DOCX data to Document object.
    """

    # ZIP magic number (DOCX is a ZIP file)
    ZIP_MAGIC = b'PK\x03\x04'

    def convert(
        self,
        file_data: bytes,
        file_stream: Optional[BinaryIO] = None,
        **kwargs
    ) -> Any:
        """
        Convert binary DOCX data to Document object.

        Args:
            file_data: Raw binary DOCX data
            file_stream: Optional file stream
            **kwargs: Additional options

        Returns:
            docx.Document object

        Raises:
            DocumentOpenError: If data is not a DOCX package or cannot be parsed
        """
        from docx import Document

        if file_stream is not None and not file_data:
            file_stream.seek(0)
            file_data = file_stream.read()

        if not self.validate(file_data):
            raise DocumentOpenError("Input is not a valid DOCX package")

        stream = BytesIO(file_data)
        try:
            return Document(stream)
        except Exception as e:
            logger.error(f"Failed to open DOCX package: {e}")
            raise DocumentOpenError(f"Failed to open DOCX package: {e}") from e

    def get_format_name(self) -> str:
        """Return format name."""
        return "DOCX Document"

    def validate(self, file_data: bytes) -> bool:
        """
        Validate if data is a valid DOCX (ZIP with specific structure).

        Args:
            file_data: Raw binary file data

        Returns:
            True if file appears to be a DOCX
        """
        if not file_data or len(file_data) < 4:
            return False

        if not file_data[:4] == self.ZIP_MAGIC:
            return False

        # Check for DOCX-specific content
        try:
            with zipfile.ZipFile(BytesIO(file_data), 'r') as zf:
                return '[Content_Types].xml' in zf.namelist()
        except zipfile.BadZipFile:
            return False


__all__ = ['DOCXFileConverter']
