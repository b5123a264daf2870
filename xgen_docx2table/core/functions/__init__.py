# xgen_docx2table/core/functions/__init__.py
"""
Functions - Common Building Blocks

Module Components:
- file_converter: BaseFileConverter interface
- table_extractor: Result data classes and BaseTableExtractor
- resolution: ObjectReference, ResolutionMap, ResolverPool
- storage_backend: Upload backends (Local, S3)
- img_processor: Image upload -> hosted URI (ImageProcessor class)
- equation_converter: Embedded equation -> LaTeX converters

Usage Example:
    from xgen_docx2table.core.functions import ImageProcessor, ResolverPool
    from xgen_docx2table.core.functions.storage_backend import LocalStorageBackend
"""

# Storage backend module
from xgen_docx2table.core.functions.storage_backend import (
    StorageType,
    BaseStorageBackend,
    LocalStorageBackend,
    S3StorageBackend,
    create_storage_backend,
    get_default_backend,
)

# Image processor module
from xgen_docx2table.core.functions.img_processor import (
    ImageProcessor,
    ImageProcessorConfig,
    ImageFormat,
    NamingStrategy,
)

# Equation converter module
from xgen_docx2table.core.functions.equation_converter import (
    BaseEquationConverter,
    NullEquationConverter,
    CallableEquationConverter,
    MTEFEquationConverter,
    normalize_display_math,
)

# Resolution module
from xgen_docx2table.core.functions.resolution import (
    ObjectReference,
    ResolutionMap,
    ResolutionOutcome,
    ResolverPool,
    resolve_concurrently,
)

# Table data
from xgen_docx2table.core.functions.table_extractor import (
    RowData,
    TableData,
    WordTables,
    TableExtractorConfig,
    BaseTableExtractor,
)

__all__ = [
    # Storage backends
    "StorageType",
    "BaseStorageBackend",
    "LocalStorageBackend",
    "S3StorageBackend",
    "create_storage_backend",
    "get_default_backend",
    # Image processor
    "ImageProcessor",
    "ImageProcessorConfig",
    "ImageFormat",
    "NamingStrategy",
    # Equation converters
    "BaseEquationConverter",
    "NullEquationConverter",
    "CallableEquationConverter",
    "MTEFEquationConverter",
    "normalize_display_math",
    # Resolution
    "ObjectReference",
    "ResolutionMap",
    "ResolutionOutcome",
    "ResolverPool",
    "resolve_concurrently",
    # Table data
    "RowData",
    "TableData",
    "WordTables",
    "TableExtractorConfig",
    "BaseTableExtractor",
]
