# xgen_docx2table/core/processor/base_handler.py
"""
BaseHandler - Abstract base class for document table handlers

Manages config, ImageProcessor and the equation converter passed from
WordTableProcessor at instance level for reuse by internal methods.

Each handler should override:
- _create_file_converter(): Provide format-specific file converter
- _create_table_extractor(): Provide format-specific table extractor
- _create_format_image_processor(): Provide format-specific image processor

Processing Pipeline:
    1. file_converter.convert() - Binary -> Document object
    2. Reference collection - embedded objects of the document
    3. Resolution phase - equations and images, concurrently
    4. Table walk - cells rendered from the frozen lookups
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, TYPE_CHECKING

from xgen_docx2table.core.functions.equation_converter import BaseEquationConverter
from xgen_docx2table.core.functions.file_converter import BaseFileConverter
from xgen_docx2table.core.functions.img_processor import ImageProcessor
from xgen_docx2table.core.functions.resolution import ResolverPool
from xgen_docx2table.core.functions.table_extractor import (
    BaseTableExtractor,
    TableExtractorConfig,
    WordTables,
)

if TYPE_CHECKING:
    from xgen_docx2table.core.table_processor import CurrentFile

logger = logging.getLogger("xgen_docx2table.processor")

DEFAULT_HANDLER_CONFIG: Dict[str, Any] = {
    "max_workers": 8,
    "placeholder": "",
    "strict": False,
}


class BaseHandler(ABC):
    """
    Abstract base class for document handlers.

    Attributes:
        config: Configuration dictionary passed from WordTableProcessor
        image_processor: Core ImageProcessor instance
        equation_converter: Equation converter (None -> handler default)
        format_image_processor: Format-specific image processor (lazy-initialized)
        file_converter: Format-specific file converter (lazy-initialized)
        table_extractor: Format-specific table extractor (lazy-initialized)
        logger: Logging instance
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        image_processor: Optional[ImageProcessor] = None,
        equation_converter: Optional[BaseEquationConverter] = None,
    ):
        """
        Initialize BaseHandler.

        Args:
            config: Configuration dictionary (see DEFAULT_HANDLER_CONFIG)
            image_processor: ImageProcessor instance
            equation_converter: Equation converter instance
        """
        self._config = {**DEFAULT_HANDLER_CONFIG, **(config or {})}
        self._image_processor = image_processor or ImageProcessor()
        self._equation_converter = equation_converter
        self._file_converter: Optional[BaseFileConverter] = None
        self._table_extractor: Optional[BaseTableExtractor] = None
        self._format_image_processor: Optional[ImageProcessor] = None
        self._logger = logging.getLogger(f"xgen_docx2table.processor.{self.__class__.__name__}")

    @abstractmethod
    def _create_file_converter(self) -> BaseFileConverter:
        """Create format-specific file converter."""
        pass

    @abstractmethod
    def _create_table_extractor(self) -> BaseTableExtractor:
        """Create format-specific table extractor."""
        pass

    def _create_format_image_processor(self) -> ImageProcessor:
        """Create format-specific image processor. Default: the core processor."""
        return self._image_processor

    def _create_table_extractor_config(self) -> TableExtractorConfig:
        """Build TableExtractorConfig from the config dict."""
        extractor_config = TableExtractorConfig(placeholder=self._config["placeholder"])
        if "line_break" in self._config:
            extractor_config.line_break = self._config["line_break"]
        if "image_tag_template" in self._config:
            extractor_config.image_tag_template = self._config["image_tag_template"]
        return extractor_config

    def create_resolver_pool(self, name: str) -> ResolverPool:
        """
        ResolverPool configured from the config dict.

        Pools always degrade; strict mode is applied by the handler once both
        phases are done so all failures are reported together.
        """
        return ResolverPool(
            max_workers=self._config["max_workers"],
            placeholder=self._config["placeholder"],
            name=name,
        )

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def image_processor(self) -> ImageProcessor:
        return self._image_processor

    @property
    def equation_converter(self) -> Optional[BaseEquationConverter]:
        return self._equation_converter

    @property
    def format_image_processor(self) -> ImageProcessor:
        """Format-specific image processor (lazy initialization)."""
        if self._format_image_processor is None:
            self._format_image_processor = self._create_format_image_processor()
        return self._format_image_processor

    @property
    def file_converter(self) -> BaseFileConverter:
        """File converter (lazy initialization)."""
        if self._file_converter is None:
            self._file_converter = self._create_file_converter()
        return self._file_converter

    @property
    def table_extractor(self) -> BaseTableExtractor:
        """Table extractor (lazy initialization)."""
        if self._table_extractor is None:
            self._table_extractor = self._create_table_extractor()
        return self._table_extractor

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def convert_file(self, current_file: "CurrentFile") -> Any:
        """Binary -> format-specific document object."""
        return self.file_converter.convert(
            current_file.get("file_data", b""),
            current_file.get("file_stream"),
        )

    @abstractmethod
    def extract_tables(self, current_file: "CurrentFile", **kwargs) -> WordTables:
        """
        Extract all tables from a file.

        Args:
            current_file: CurrentFile dict containing file info and binary data
            **kwargs: Additional options

        Returns:
            WordTables
        """
        pass


__all__ = ["BaseHandler", "DEFAULT_HANDLER_CONFIG"]
