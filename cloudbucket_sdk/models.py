"""
Data models for the CloudBucket SDK.

This module defines the response envelope returned by every network call,
the listing options accepted by the listing and search operations, and
typed views over the bucket, file and statistics payloads.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from dataclasses import dataclass, field
from enum import Enum


def _parse_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class SortDirection(Enum):
    """Sort directions understood by the listing endpoints."""
    ASC = "asc"
    DESC = "desc"


@dataclass
class ErrorEntry:
    """A single error item reported by the service or the transport."""

    origin: str
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ErrorEntry":
        """Create ErrorEntry from an API error item."""
        return cls(
            origin=data.get("origin", "server_error"),
            code=data.get("code", "unknown_error"),
            message=data.get("message", ""),
            details=data.get("details"),
        )

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "origin": self.origin,
            "code": self.code,
            "message": self.message,
        }
        if self.details is not None:
            result["details"] = self.details
        return result


@dataclass
class APIError:
    """Error information carried in the ``errors`` field of an envelope."""

    status: int
    status_text: str
    items: List[ErrorEntry] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "statusText": self.status_text,
            "items": [item.to_dict() for item in self.items],
        }

    def __str__(self):
        messages = "; ".join(item.message for item in self.items if item.message)
        if messages:
            return f"{self.status} {self.status_text}: {messages}"
        return f"{self.status} {self.status_text}"


@dataclass
class APIResponse:
    """
    Uniform response envelope.

    Exactly one of ``data`` and ``errors`` is set for every response that
    carries a body. The SDK hands this object back to the caller untouched.
    """

    data: Any = None
    errors: Optional[APIError] = None

    @property
    def ok(self) -> bool:
        return self.errors is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "data": self.data,
            "errors": self.errors.to_dict() if self.errors else None,
        }


@dataclass
class SortOptions:
    """Sort field and direction for listing operations."""

    field: str
    direction: SortDirection = SortDirection.ASC

    def to_dict(self) -> Dict[str, Any]:
        direction = self.direction.value if isinstance(self.direction, SortDirection) else self.direction
        return {"field": self.field, "direction": direction}


@dataclass
class ListOptions:
    """Pagination and sorting settings shared by the listing operations."""

    limit: Optional[int] = None
    page: Optional[int] = None
    sort: Optional[SortOptions] = None
    return_count_info: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire form, leaving out unset fields."""
        result: Dict[str, Any] = {}
        if self.limit is not None:
            result["limit"] = self.limit
        if self.page is not None:
            result["page"] = self.page
        if self.sort is not None:
            result["sort"] = self.sort.to_dict()
        if self.return_count_info is not None:
            result["returnCountInfo"] = self.return_count_info
        return result


@dataclass
class BucketListOptions(ListOptions):
    """Options for listing buckets."""


@dataclass
class FileListOptions(ListOptions):
    """Options for listing or searching files."""


@dataclass
class Bucket:
    """Information about a storage bucket."""

    id: str
    name: str
    is_public: bool = True
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bucket":
        """Create Bucket from API response dictionary."""
        return cls(
            id=data.get("_id") or data.get("id"),
            name=data["name"],
            is_public=data.get("isPublic", True),
            created_at=_parse_datetime(data.get("createdAt")),
            updated_at=_parse_datetime(data.get("updatedAt")),
        )


@dataclass
class FileObject:
    """Information about a file stored in a bucket."""

    id: str
    bucket_id: str
    file_name: str
    size: int = 0
    is_public: bool = True
    encoding: Optional[str] = None
    mime_type: Optional[str] = None
    public_path: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FileObject":
        """Create FileObject from API response dictionary."""
        return cls(
            id=data.get("_id") or data.get("id"),
            bucket_id=data["bucketId"],
            file_name=data["fileName"],
            size=data.get("size", 0),
            is_public=data.get("isPublic", True),
            encoding=data.get("encoding"),
            mime_type=data.get("mimeType"),
            public_path=data.get("publicPath"),
            uploaded_at=_parse_datetime(data.get("uploadedAt")),
            updated_at=_parse_datetime(data.get("updatedAt")),
        )


@dataclass
class StorageStats:
    """Aggregate counters for the whole storage namespace."""

    object_count: int = 0
    total_storage_size: int = 0
    average_object_size: float = 0.0
    min_object_size: int = 0
    max_object_size: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StorageStats":
        return cls(
            object_count=data.get("objectsCount", 0),
            total_storage_size=data.get("totalStorageSize", 0),
            average_object_size=data.get("averageObjectSize", 0.0),
            min_object_size=data.get("minObjectSize", 0),
            max_object_size=data.get("maxObjectSize", 0),
        )
