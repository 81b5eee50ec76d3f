"""
CloudBucket SDK - Python client for a cloud storage REST service.

This package provides:
- Bucket creation, listing and per-bucket management
- Storage-wide statistics and file search across buckets
- Synchronous (requests) and async/await (aiohttp) transports
- A CLI for working with buckets from the command line
"""

__version__ = "1.0.0"

from .config import ClientConfig
from .storage import StorageManager
from .bucket import BucketManager
from .transport import Transport, RequestsTransport, AiohttpTransport
from .models import (
    APIResponse,
    APIError,
    ErrorEntry,
    SortDirection,
    SortOptions,
    BucketListOptions,
    FileListOptions,
    Bucket,
    FileObject,
    StorageStats,
)
from .exceptions import (
    CloudBucketError,
    ClientError,
    InvalidArgumentError,
    InvalidValueError,
    ConfigurationError,
)

__all__ = [
    # Facade and transports
    "StorageManager",
    "BucketManager",
    "ClientConfig",
    "Transport",
    "RequestsTransport",
    "AiohttpTransport",

    # Data models
    "APIResponse",
    "APIError",
    "ErrorEntry",
    "SortDirection",
    "SortOptions",
    "BucketListOptions",
    "FileListOptions",
    "Bucket",
    "FileObject",
    "StorageStats",

    # Exceptions
    "CloudBucketError",
    "ClientError",
    "InvalidArgumentError",
    "InvalidValueError",
    "ConfigurationError",
]
