# xgen_docx2table/core/table_processor.py
"""WordTableProcessor - Table Extraction Class

Main entry point of the xgen_docx2table library. Opens a Word document,
resolves its embedded images (hosted URIs) and equations (LaTeX), and
returns every table cell as plain text and as an HTML fragment.

Usage Example:
    from xgen_docx2table import WordTableProcessor
    from xgen_docx2table.core.functions import (
        ImageProcessor,
        LocalStorageBackend,
        MTEFEquationConverter,
    )

    processor = WordTableProcessor(
        image_processor=ImageProcessor(
            directory_path="uploads",
            storage_backend=LocalStorageBackend(base_url="https://cdn.example.com"),
        ),
        equation_converter=MTEFEquationConverter(mtef_to_latex),
    )

    result = processor.open("exam.docx")
    for table in result.tables:
        for row in table.rows:
            print(row.content, row.html_content)
"""
import io
import logging
import os
from pathlib import Path
from typing import Any, BinaryIO, Dict, Optional, TypedDict, Union

from xgen_docx2table.core.exceptions import DocumentOpenError
from xgen_docx2table.core.functions.equation_converter import BaseEquationConverter
from xgen_docx2table.core.functions.img_processor import ImageProcessor
from xgen_docx2table.core.functions.table_extractor import WordTables
from xgen_docx2table.core.processor.docx_handler import DOCXHandler

logger = logging.getLogger("xgen_docx2table")


class CurrentFile(TypedDict, total=False):
    """
    TypedDict containing file information.

    Standard structure for reading files at binary level and passing to handlers.

    Attributes:
        file_path: Absolute path of the original file
        file_name: File name (including extension)
        file_extension: File extension (lowercase, without dot)
        file_data: Binary data of the file
        file_stream: BytesIO stream (reusable)
        file_size: File size in bytes
    """
    file_path: str
    file_name: str
    file_extension: str
    file_data: bytes
    file_stream: io.BytesIO
    file_size: int


class WordTableProcessor:
    """
    Word document table extractor.

    Args:
        config: Configuration dictionary
            - max_workers: Resolver threads per phase (default: 8)
            - placeholder: Value for unresolved objects (default: "")
            - strict: Raise ResolutionError if any object fails (default: False)
            - line_break: HTML paragraph separator (default: "<br/>")
            - image_tag_template: Image markup with {uri}, {width}, {height}
        image_processor: ImageProcessor used to upload images
        equation_converter: Converter for embedded equation objects

    Example:
        >>> processor = WordTableProcessor()
        >>> result = processor.open("document.docx")
        >>> result.tables[0].rows[0].content
        ['Hello']
    """

    SUPPORTED_EXTENSIONS = frozenset({"docx"})

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        image_processor: Optional[ImageProcessor] = None,
        equation_converter: Optional[BaseEquationConverter] = None,
    ):
        self._config = dict(config or {})
        self._image_processor = image_processor
        self._equation_converter = equation_converter
        self._handler: Optional[DOCXHandler] = None

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def handler(self) -> DOCXHandler:
        """DOCX handler (lazy initialization)."""
        if self._handler is None:
            self._handler = DOCXHandler(
                config=self._config,
                image_processor=self._image_processor,
                equation_converter=self._equation_converter,
            )
        return self._handler

    # =========================================================================
    # Public API
    # =========================================================================

    def open(self, file_path: Union[str, Path]) -> WordTables:
        """
        Open a document from the filesystem and extract its tables.

        Args:
            file_path: Path to a .docx file

        Returns:
            WordTables

        Raises:
            DocumentOpenError: File missing, unreadable or not a DOCX package
        """
        current_file = self._create_current_file(str(file_path))
        return self.handler.extract_tables(current_file)

    def read(
        self,
        source: Union[bytes, bytearray, BinaryIO],
        file_name: Optional[str] = None,
    ) -> WordTables:
        """
        Extract tables from in-memory DOCX data.

        Args:
            source: Raw bytes or a readable binary stream
            file_name: Optional name reported as the result source

        Returns:
            WordTables
        """
        if isinstance(source, (bytes, bytearray)):
            file_data = bytes(source)
        else:
            try:
                source.seek(0)
            except (AttributeError, OSError):
                pass
            file_data = source.read()

        current_file: CurrentFile = {
            "file_data": file_data,
            "file_stream": io.BytesIO(file_data),
            "file_size": len(file_data),
        }
        if file_name:
            current_file["file_path"] = file_name
            current_file["file_name"] = os.path.basename(file_name)
            current_file["file_extension"] = os.path.splitext(file_name)[1].lower().lstrip(".")

        return self.handler.extract_tables(current_file)

    def process_document(self, doc: Any, source: Optional[str] = None) -> WordTables:
        """Extract tables from an already opened python-docx Document."""
        return self.handler.process_document(doc, source=source)

    # =========================================================================
    # Private Methods
    # =========================================================================

    def _create_current_file(self, file_path: str) -> CurrentFile:
        """Read a file into a CurrentFile dict."""
        path = Path(file_path)
        if not path.is_file():
            raise DocumentOpenError(f"File not found: {file_path}")

        extension = path.suffix.lower().lstrip(".")
        if extension and extension not in self.SUPPORTED_EXTENSIONS:
            logger.warning(f"Unexpected extension '.{extension}', trying DOCX: {file_path}")

        try:
            file_data = path.read_bytes()
        except OSError as e:
            raise DocumentOpenError(f"Cannot read file {file_path}: {e}") from e

        return {
            "file_path": str(path.absolute()),
            "file_name": path.name,
            "file_extension": extension,
            "file_data": file_data,
            "file_stream": io.BytesIO(file_data),
            "file_size": len(file_data),
        }


def open_document(file_path: Union[str, Path], **kwargs) -> WordTables:
    """Shortcut for ``WordTableProcessor(**kwargs).open(file_path)``."""
    return WordTableProcessor(**kwargs).open(file_path)


def read_document(source: Union[bytes, bytearray, BinaryIO], **kwargs) -> WordTables:
    """Shortcut for ``WordTableProcessor(**kwargs).read(source)``."""
    return WordTableProcessor(**kwargs).read(source)


__all__ = [
    "CurrentFile",
    "WordTableProcessor",
    "open_document",
    "read_document",
]
