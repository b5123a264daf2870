# xgen_docx2table/core/functions/img_processor.py
"""
Image Processing Module

Publishes embedded image data through a pluggable storage backend and
returns the hosted URI. Uses Strategy pattern for storage backends.

This is the BASE class for format-specific image processors
(DOCXImageProcessor resolves DOCX image relationships through it).

Main Features:
- Pluggable storage backend (Local, S3)
- Collision-free object keys (random UUID token or content hash)
- Duplicate image detection (identical bytes are uploaded once)
- Format detection from magic bytes when the caller does not know it

Usage Example:
    from xgen_docx2table.core.functions.img_processor import ImageProcessor
    from xgen_docx2table.core.functions.storage_backend import LocalStorageBackend

    processor = ImageProcessor(
        directory_path="uploads",
        storage_backend=LocalStorageBackend(base_url="https://cdn.example.com"),
    )
    uri = processor.upload_image(png_bytes, image_format="png")
    # Result: "https://cdn.example.com/uploads/3f2a9c...e1.png"
"""
import hashlib
import logging
import threading
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

from xgen_docx2table.core.exceptions import UploadError
from xgen_docx2table.core.functions.storage_backend import (
    BaseStorageBackend,
    StorageType,
    get_default_backend,
)

logger = logging.getLogger("xgen_docx2table.image_processor")


class ImageFormat(Enum):
    """Image formats recognised from magic bytes."""
    PNG = "png"
    JPEG = "jpeg"
    GIF = "gif"
    BMP = "bmp"
    WEBP = "webp"
    TIFF = "tiff"
    EMF = "emf"
    WMF = "wmf"
    UNKNOWN = "unknown"


class NamingStrategy(Enum):
    """Object key naming strategies."""
    HASH = "hash"           # Content-based hash (identical images share a key)
    UUID = "uuid"           # Random token, never collides across uploads


@dataclass
class ImageProcessorConfig:
    """
    ImageProcessor Configuration.

    Attributes:
        directory_path: Directory path or key prefix for uploaded images
        naming_strategy: Object key naming strategy
        default_format: Extension used when the format is unknown
        create_directory: Prepare storage before the first upload
        skip_duplicate: Upload identical bytes only once per processor
        hash_algorithm: Hash algorithm (for hash strategy and duplicate detection)
        max_filename_length: Maximum filename length
    """
    directory_path: str = "temp/images"
    naming_strategy: NamingStrategy = NamingStrategy.UUID
    default_format: ImageFormat = ImageFormat.PNG
    create_directory: bool = True
    skip_duplicate: bool = True
    hash_algorithm: str = "sha256"
    max_filename_length: int = 64


class ImageProcessor:
    """
    Base Image Processing Class.

    Uploads image data using a pluggable storage backend and returns the
    hosted URI. Safe to call from several resolver threads at once.

    Args:
        directory_path: Key prefix / directory (default: "temp/images")
        naming_strategy: Key naming strategy (default: UUID)
        storage_backend: Storage backend instance (default: LocalStorageBackend)
        config: ImageProcessorConfig object (takes precedence)

    Examples:
        >>> processor = ImageProcessor()
        >>> processor.upload_image(png_bytes, image_format="png")
        "temp/images/9b1de0c4e8a94f7c.png"
    """

    def __init__(
        self,
        directory_path: str = "temp/images",
        naming_strategy: Union[NamingStrategy, str] = NamingStrategy.UUID,
        storage_backend: Optional[BaseStorageBackend] = None,
        config: Optional[ImageProcessorConfig] = None,
    ):
        if config:
            self.config = config
        else:
            if isinstance(naming_strategy, str):
                naming_strategy = NamingStrategy(naming_strategy.lower())

            self.config = ImageProcessorConfig(
                directory_path=directory_path,
                naming_strategy=naming_strategy,
            )

        self._storage_backend = storage_backend or get_default_backend()

        # content hash -> uploaded URI
        self._processed_hashes: Dict[str, str] = {}
        self._lock = threading.Lock()
        self._storage_ready = False

        self._logger = logging.getLogger(
            f"xgen_docx2table.image_processor.{self.__class__.__name__}"
        )

    @property
    def storage_backend(self) -> BaseStorageBackend:
        """Get the current storage backend."""
        return self._storage_backend

    @storage_backend.setter
    def storage_backend(self, backend: BaseStorageBackend) -> None:
        with self._lock:
            self._storage_backend = backend
            self._storage_ready = False

    @property
    def storage_type(self) -> StorageType:
        """Get the current storage type."""
        return self._storage_backend.storage_type

    def _ensure_storage_ready(self) -> None:
        """Prepare the backend once, on first use."""
        if not self.config.create_directory:
            return
        with self._lock:
            if self._storage_ready:
                return
            self._storage_backend.ensure_ready(self.config.directory_path)
            self._storage_ready = True

    def share_cache_with(self, other: "ImageProcessor") -> None:
        """Use the duplicate-detection cache (and its lock) of another processor."""
        self._processed_hashes = other._processed_hashes
        self._lock = other._lock

    def _compute_hash(self, data: bytes) -> str:
        """Compute hash of image data."""
        hasher = hashlib.new(self.config.hash_algorithm)
        hasher.update(data)
        return hasher.hexdigest()[:32]

    def _detect_format(self, data: bytes) -> ImageFormat:
        """Detect format from image data using magic bytes."""
        if len(data) < 12:
            return ImageFormat.UNKNOWN

        if data[:8] == b'\x89PNG\r\n\x1a\n':
            return ImageFormat.PNG
        elif data[:2] == b'\xff\xd8':
            return ImageFormat.JPEG
        elif data[:6] in (b'GIF87a', b'GIF89a'):
            return ImageFormat.GIF
        elif data[:2] == b'BM':
            return ImageFormat.BMP
        elif data[:4] == b'RIFF' and data[8:12] == b'WEBP':
            return ImageFormat.WEBP
        elif data[:4] in (b'II*\x00', b'MM\x00*'):
            return ImageFormat.TIFF
        elif data[:4] == b'\x01\x00\x00\x00' and data[40:44] == b' EMF':
            return ImageFormat.EMF
        elif data[:4] == b'\xd7\xcd\xc6\x9a':
            return ImageFormat.WMF
        else:
            return ImageFormat.UNKNOWN

    def _resolve_extension(self, data: bytes, image_format: Optional[str]) -> str:
        if image_format:
            return image_format.lower().lstrip(".")
        detected = self._detect_format(data)
        if detected != ImageFormat.UNKNOWN:
            return detected.value
        return self.config.default_format.value

    def generate_key(self, data: bytes, extension: str) -> str:
        """
        Build the object key ``<directory>/<token>.<extension>``.

        Args:
            data: Image bytes (used by the hash strategy)
            extension: File extension without dot

        Returns:
            Object key / relative file path
        """
        if self.config.naming_strategy == NamingStrategy.HASH:
            base = self._compute_hash(data)
        else:
            base = uuid.uuid4().hex

        filename = f"{base}.{extension}"
        if len(filename) > self.config.max_filename_length:
            max_base_len = self.config.max_filename_length - len(extension) - 1
            filename = f"{base[:max_base_len]}.{extension}"

        directory = self.config.directory_path.replace("\\", "/").rstrip("/")
        if directory:
            return f"{directory}/{filename}"
        return filename

    def upload_image(
        self,
        image_data: bytes,
        image_format: Optional[str] = None,
    ) -> str:
        """
        Upload image data and return its hosted URI.

        Args:
            image_data: Image binary data
            image_format: Known format extension (e.g. "png"); detected if omitted

        Returns:
            URI built by the storage backend

        Raises:
            UploadError: Empty data or backend failure
        """
        if not image_data:
            raise UploadError("Empty image data provided")

        image_hash = self._compute_hash(image_data)
        if self.config.skip_duplicate:
            with self._lock:
                existing = self._processed_hashes.get(image_hash)
            if existing is not None:
                self._logger.debug(f"Duplicate image detected: {existing}")
                return existing

        extension = self._resolve_extension(image_data, image_format)
        key = self.generate_key(image_data, extension)

        self._ensure_storage_ready()
        if not self._storage_backend.save(image_data, key):
            raise UploadError(f"Storage backend rejected {key}")

        uri = self._storage_backend.build_url(key)
        self._logger.debug(f"Image uploaded: {key} -> {uri}")

        with self._lock:
            stored = self._processed_hashes.setdefault(image_hash, uri)
        if self.config.skip_duplicate and stored != uri:
            # identical bytes uploaded concurrently; the first URI wins
            self._logger.debug(f"Concurrent duplicate {uri}, using {stored}")
            return stored
        return uri

    def process_image(self, image_data: bytes, **kwargs) -> str:
        """
        Process and upload image data.

        Subclasses override this for format-specific handling. Default
        implementation uploads with the ``image_format`` keyword, if given.
        """
        return self.upload_image(image_data, image_format=kwargs.get("image_format"))

    def get_processed_count(self) -> int:
        """Return number of distinct uploaded images."""
        with self._lock:
            return len(self._processed_hashes)


__all__ = [
    "ImageProcessor",
    "ImageProcessorConfig",
    "ImageFormat",
    "NamingStrategy",
]
