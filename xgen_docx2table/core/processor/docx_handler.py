# xgen_docx2table/core/processor/docx_handler.py
"""
DOCX Handler - DOCX Table Extractor

Key Features:
- Opens the package with python-docx (validation -> DocumentOpenError)
- Collects embedded equation objects and images from the relationship table
- Resolves equations (LaTeX) and images (hosted URI) concurrently, once per
  relationship id
- Renders every table cell as (plain text, HTML) from the frozen lookups

Pipeline:
    open document -> collect references -> resolve equations | resolve images
    -> (barrier) -> walk tables -> WordTables

Class-based Handler:
- DOCXHandler inherits from BaseHandler to manage config/image_processor
- Internal methods access via self
"""
import logging
from typing import Any, Optional, TYPE_CHECKING

from xgen_docx2table.core.exceptions import ResolutionError
from xgen_docx2table.core.functions.resolution import resolve_concurrently
from xgen_docx2table.core.functions.table_extractor import WordTables
from xgen_docx2table.core.processor.base_handler import BaseHandler
from xgen_docx2table.core.processor.docx_helper import (
    DOCXEquationProcessor,
    DOCXFileConverter,
    DOCXImageProcessor,
    DOCXTableExtractor,
    RenderContext,
    collect_references,
)

if TYPE_CHECKING:
    from xgen_docx2table.core.table_processor import CurrentFile

logger = logging.getLogger("xgen_docx2table.processor")


class DOCXHandler(BaseHandler):
    """
    DOCX Table Processing Handler

    Usage:
        handler = DOCXHandler(config=config, image_processor=image_processor,
                              equation_converter=converter)
        result = handler.extract_tables(current_file)
    """

    def _create_file_converter(self) -> DOCXFileConverter:
        """Create DOCX-specific file converter."""
        return DOCXFileConverter()

    def _create_table_extractor(self) -> DOCXTableExtractor:
        """Create DOCX-specific table extractor."""
        return DOCXTableExtractor(self._create_table_extractor_config())

    def _create_format_image_processor(self) -> DOCXImageProcessor:
        """Create DOCX-specific image processor."""
        return DOCXImageProcessor.from_processor(self._image_processor)

    def _create_equation_processor(self) -> DOCXEquationProcessor:
        return DOCXEquationProcessor(self._equation_converter)

    def extract_tables(self, current_file: "CurrentFile", **kwargs) -> WordTables:
        """
        Extract tables from a DOCX file.

        Args:
            current_file: CurrentFile dict containing file info and binary data

        Returns:
            WordTables

        Raises:
            DocumentOpenError: Input is not a readable DOCX package
            ResolutionError: strict mode only
        """
        file_path = current_file.get("file_path")
        self.logger.info(f"DOCX processing: {file_path or '<stream>'}")

        doc = self.convert_file(current_file)
        return self.process_document(doc, source=file_path)

    def process_document(self, doc: Any, source: Optional[str] = None) -> WordTables:
        """
        Run the pipeline on an already opened python-docx Document.

        Args:
            doc: python-docx Document
            source: Source path for the result (optional)

        Returns:
            WordTables
        """
        equation_refs, image_refs = collect_references(doc)
        self.logger.info(
            f"Found {len(doc.tables)} tables, {len(equation_refs)} equations, "
            f"{len(image_refs)} images"
        )

        equation_processor = self._create_equation_processor()
        image_processor = self.format_image_processor
        equation_pool = self.create_resolver_pool("equations")
        image_pool = self.create_resolver_pool("images")

        # Both phases write disjoint maps; the walk starts once both finished.
        outcomes = resolve_concurrently({
            "equations": lambda: equation_pool.resolve_all(
                equation_refs, equation_processor.resolve_reference
            ),
            "images": lambda: image_pool.resolve_all(
                image_refs, image_processor.resolve_reference
            ),
        })
        equations = outcomes["equations"]
        images = outcomes["images"]

        failures = {**equations.failures, **images.failures}
        if failures and self._config["strict"]:
            raise ResolutionError(
                f"{len(failures)} embedded objects could not be resolved", failures
            )

        context = RenderContext(equations=equations.values, images=images.values)
        tables = self.table_extractor.extract_tables(doc, context)

        self.logger.info(
            f"DOCX processing completed: {len(tables)} tables, "
            f"{len(equations.values)} equations, {len(images.values)} images, "
            f"{len(failures)} unresolved"
        )

        return WordTables(
            tables=tables,
            equations=equations.values,
            images=images.values,
            failures=failures,
            source=source,
        )


__all__ = ["DOCXHandler"]
