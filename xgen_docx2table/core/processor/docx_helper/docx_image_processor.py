# xgen_docx2table/core/processor/docx_helper/docx_image_processor.py
"""
DOCX Image Processor

Provides DOCX-specific image processing that inherits from ImageProcessor.
Resolves an image relationship (ObjectReference) to a hosted URI.
"""
import logging
from typing import Optional

from xgen_docx2table.core.exceptions import UploadError
from xgen_docx2table.core.functions.img_processor import (
    ImageProcessor,
    ImageProcessorConfig,
)
from xgen_docx2table.core.functions.resolution import ObjectReference
from xgen_docx2table.core.functions.storage_backend import BaseStorageBackend

logger = logging.getLogger("xgen_docx2table.image_processor.docx")


class DOCXImageProcessor(ImageProcessor):
    """
    DOCX-specific image processor.

    Example:
        processor = DOCXImageProcessor(storage_backend=backend)
        uri = processor.resolve_reference(image_ref)
    """

    def __init__(
        self,
        directory_path: str = "temp/images",
        storage_backend: Optional[BaseStorageBackend] = None,
        config: Optional[ImageProcessorConfig] = None,
    ):
        super().__init__(
            directory_path=directory_path,
            storage_backend=storage_backend,
            config=config,
        )

    @classmethod
    def from_processor(cls, image_processor: ImageProcessor) -> "DOCXImageProcessor":
        """
        Build a DOCX processor on top of another processor.

        The result uses the same config, backend and duplicate-detection
        cache, so identical bytes are still uploaded once per caller
        processor and its get_processed_count() stays accurate.
        """
        if isinstance(image_processor, cls):
            return image_processor
        processor = cls(
            storage_backend=image_processor.storage_backend,
            config=image_processor.config,
        )
        processor.share_cache_with(image_processor)
        return processor

    def process_image(
        self,
        image_data: bytes,
        rel_id: Optional[str] = None,
        image_format: Optional[str] = None,
        **kwargs
    ) -> str:
        """
        Upload DOCX image data.

        Args:
            image_data: Raw image binary data
            rel_id: Relationship ID (for log messages)
            image_format: Part extension (e.g. "png", "emf")

        Returns:
            Hosted URI
        """
        try:
            return self.upload_image(image_data, image_format=image_format)
        except UploadError:
            raise
        except Exception as e:
            raise UploadError(f"Failed to upload image {rel_id}: {e}") from e

    def resolve_reference(self, reference: ObjectReference) -> str:
        """Resolver-pool entry point: image relationship -> URI."""
        return self.process_image(
            reference.read(),
            rel_id=reference.identifier,
            image_format=reference.format or None,
        )


__all__ = ['DOCXImageProcessor']
