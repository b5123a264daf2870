# xgen_docx2table/core/functions/storage_backend.py
"""
Storage Backend Module

Provides abstract base class and implementations for image upload backends.
ImageProcessor uses these backends to publish embedded images and obtain the
hosted URI that is written into cell HTML.

Storage Backends:
- LocalStorageBackend: Save to local file system (optionally served from a base URL)
- S3StorageBackend: Upload to AWS S3 or any S3-compatible service (MinIO, ...)

Usage Example:
    from xgen_docx2table.core.functions.storage_backend import (
        LocalStorageBackend,
        S3StorageBackend,
    )
    from xgen_docx2table.core.functions.img_processor import ImageProcessor

    # Use local storage (default)
    processor = ImageProcessor()

    # Serve local files from a CDN / static host
    processor = ImageProcessor(
        storage_backend=LocalStorageBackend(base_url="https://cdn.example.com")
    )

    # Use S3
    s3_backend = S3StorageBackend(
        bucket="images",
        public_base_url="https://images.example.com",
    )
    processor = ImageProcessor(storage_backend=s3_backend)
"""
import logging
import mimetypes
import os
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger("xgen_docx2table.storage")


class StorageType(Enum):
    """Storage backend types."""
    LOCAL = "local"
    S3 = "s3"


class BaseStorageBackend(ABC):
    """
    Abstract base class for storage backends.

    Each storage type implements this interface to provide
    storage-specific save/delete logic.

    Subclasses must implement:
        - save(): Save data to storage
        - delete(): Delete file from storage
        - exists(): Check if file exists
        - ensure_ready(): Prepare storage (create dirs, validate connection)
    """

    def __init__(self, storage_type: StorageType):
        self._storage_type = storage_type
        self._logger = logging.getLogger(
            f"xgen_docx2table.storage.{self.__class__.__name__}"
        )

    @property
    def storage_type(self) -> StorageType:
        """Get storage type."""
        return self._storage_type

    @property
    def logger(self) -> logging.Logger:
        """Get logger."""
        return self._logger

    @abstractmethod
    def save(self, data: bytes, file_path: str) -> bool:
        """
        Save data to storage.

        Args:
            data: Binary data to save
            file_path: Target file path or key

        Returns:
            True if successful, False otherwise
        """
        pass

    @abstractmethod
    def delete(self, file_path: str) -> bool:
        """Delete file from storage. Returns True if something was deleted."""
        pass

    @abstractmethod
    def exists(self, file_path: str) -> bool:
        """Check if file exists in storage."""
        pass

    @abstractmethod
    def ensure_ready(self, directory_path: str) -> None:
        """
        Ensure storage is ready (create directory, validate connection, etc.).

        Args:
            directory_path: Base directory or key prefix
        """
        pass

    def build_url(self, file_path: str) -> str:
        """
        Build URL or path for the saved file.

        Override in subclasses for storage-specific URL formats.
        """
        return file_path.replace("\\", "/")


class LocalStorageBackend(BaseStorageBackend):
    """
    Local file system storage backend.

    Args:
        base_url: Public URL the saved directory tree is served from.
                  When omitted, build_url() returns the file path.
    """

    def __init__(self, base_url: Optional[str] = None):
        super().__init__(StorageType.LOCAL)
        self._base_url = base_url.rstrip("/") if base_url else None

    @property
    def base_url(self) -> Optional[str]:
        return self._base_url

    def save(self, data: bytes, file_path: str) -> bool:
        """Save data to local file."""
        try:
            parent = Path(file_path).parent
            if not parent.exists():
                parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'wb') as f:
                f.write(data)
            return True
        except OSError as e:
            self._logger.error(f"Failed to save file {file_path}: {e}")
            return False

    def delete(self, file_path: str) -> bool:
        """Delete local file."""
        try:
            if os.path.exists(file_path):
                os.remove(file_path)
                return True
            return False
        except OSError as e:
            self._logger.warning(f"Failed to delete file {file_path}: {e}")
            return False

    def exists(self, file_path: str) -> bool:
        """Check if local file exists."""
        return os.path.exists(file_path)

    def ensure_ready(self, directory_path: str) -> None:
        """Create directory if it doesn't exist."""
        path = Path(directory_path)
        if not path.exists():
            path.mkdir(parents=True, exist_ok=True)
            self._logger.debug(f"Created directory: {path}")

    def build_url(self, file_path: str) -> str:
        path = file_path.replace("\\", "/")
        if self._base_url:
            return f"{self._base_url}/{path.lstrip('/')}"
        return path


class S3StorageBackend(BaseStorageBackend):
    """
    AWS S3 storage backend.

    Requires boto3 package to be installed (``pip install xgen-docx2table[s3]``).
    Works with S3-compatible services through ``endpoint_url``.

    Args:
        bucket: S3 bucket name
        region: AWS region (default: "us-east-1")
        prefix: Key prefix for uploaded objects
        endpoint_url: Custom endpoint (MinIO, Ceph, ...)
        public_base_url: Base URL objects are publicly served from
        client: Pre-built boto3 S3 client (takes precedence)
    """

    def __init__(
        self,
        bucket: str = "",
        region: str = "us-east-1",
        prefix: str = "",
        endpoint_url: Optional[str] = None,
        public_base_url: Optional[str] = None,
        client: Any = None,
    ):
        super().__init__(StorageType.S3)
        self._bucket = bucket
        self._region = region
        self._prefix = prefix.strip("/")
        self._endpoint_url = endpoint_url
        self._public_base_url = public_base_url.rstrip("/") if public_base_url else None
        self._client = client

    @property
    def bucket(self) -> str:
        """Get bucket name."""
        return self._bucket

    @property
    def region(self) -> str:
        """Get region."""
        return self._region

    @property
    def client(self) -> Any:
        """Get S3 client (lazy initialization)."""
        if self._client is None:
            import boto3

            self._client = boto3.client(
                "s3",
                region_name=self._region,
                endpoint_url=self._endpoint_url,
            )
        return self._client

    def _object_key(self, file_path: str) -> str:
        key = file_path.replace("\\", "/").lstrip("/")
        if self._prefix:
            return f"{self._prefix}/{key}"
        return key

    def save(self, data: bytes, file_path: str) -> bool:
        """Upload data to S3 bucket."""
        key = self._object_key(file_path)
        content_type = mimetypes.guess_type(key)[0] or "application/octet-stream"
        try:
            self.client.put_object(
                Bucket=self._bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
            return True
        except Exception as e:
            self._logger.error(f"Failed to upload s3://{self._bucket}/{key}: {e}")
            return False

    def delete(self, file_path: str) -> bool:
        """Delete object from S3 bucket."""
        key = self._object_key(file_path)
        try:
            self.client.delete_object(Bucket=self._bucket, Key=key)
            return True
        except Exception as e:
            self._logger.warning(f"Failed to delete s3://{self._bucket}/{key}: {e}")
            return False

    def exists(self, file_path: str) -> bool:
        """Check if object exists in S3 bucket."""
        try:
            self.client.head_object(Bucket=self._bucket, Key=self._object_key(file_path))
            return True
        except Exception:
            return False

    def ensure_ready(self, directory_path: str) -> None:
        """Verify bucket access. Key prefixes need no preparation."""
        if not self._bucket:
            raise ValueError("S3StorageBackend requires a bucket name")

    def build_url(self, file_path: str) -> str:
        """Build public URL for the object."""
        key = self._object_key(file_path)
        if self._public_base_url:
            return f"{self._public_base_url}/{key}"
        if self._endpoint_url:
            return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{key}"
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"


# Default backend instance
_default_backend = LocalStorageBackend()


def get_default_backend() -> BaseStorageBackend:
    """Get the default storage backend (local)."""
    return _default_backend


def create_storage_backend(
    storage_type: StorageType = StorageType.LOCAL,
    **kwargs
) -> BaseStorageBackend:
    """
    Factory function to create a storage backend.

    Args:
        storage_type: Type of storage backend (enum or its string value)
        **kwargs: Storage-specific options

    Returns:
        BaseStorageBackend instance
    """
    if isinstance(storage_type, str):
        storage_type = StorageType(storage_type.lower())

    if storage_type == StorageType.LOCAL:
        return LocalStorageBackend(**kwargs)
    elif storage_type == StorageType.S3:
        return S3StorageBackend(**kwargs)
    else:
        raise ValueError(f"Unsupported storage type: {storage_type}")


__all__ = [
    # Enum
    "StorageType",
    # Base class
    "BaseStorageBackend",
    # Implementations
    "LocalStorageBackend",
    "S3StorageBackend",
    # Factory
    "create_storage_backend",
    "get_default_backend",
]
