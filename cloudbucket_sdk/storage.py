"""
Storage facade of the CloudBucket SDK.

:class:`StorageManager` creates and lists buckets, reports storage-wide
statistics and searches files across buckets. It hands out
:class:`~cloudbucket_sdk.bucket.BucketManager` objects for per-bucket work.

Every network method checks its arguments first and then returns the
transport's result unchanged. With :class:`RequestsTransport` that is the
:class:`APIResponse` itself; with :class:`AiohttpTransport` it is an
awaitable resolving to it::

    async with AiohttpTransport(config) as transport:
        storage = StorageManager(transport)
        response = await storage.create_bucket("logs", is_public=False)

Bad arguments raise :class:`InvalidArgumentError` or
:class:`InvalidValueError` at call time, before any request is made.
Errors reported by the service are returned in ``response.errors``.
"""

from typing import Any, Optional

from .bucket import BucketManager
from .transport import Transport
from .utils import OptionsType, check_required, is_options_object, options_to_dict, split_listing_args
from .exceptions import InvalidValueError

STORAGE_API = "/_api/rest/v1/storage"

ROOT_BUCKET = "root"


class StorageManager:
    """Manages the buckets and files of the application's cloud storage."""

    def __init__(self, transport: Transport):
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    def bucket(self, name_or_id: str) -> BucketManager:
        """
        Create a manager for the given bucket.

        Args:
            name_or_id: Name or id of the bucket

        Returns:
            BucketManager bound to the bucket

        Raises:
            InvalidArgumentError: If name_or_id is not given
        """
        check_required("bucket name or id", name_or_id)
        return BucketManager(name_or_id, self._transport)

    @property
    def root(self) -> BucketManager:
        """Manager for the built-in ``root`` bucket."""
        return BucketManager(ROOT_BUCKET, self._transport)

    def create_bucket(self, name: str, is_public: bool = True):
        """
        Create a new bucket.

        Bucket names are case sensitive and ``root`` is reserved; the
        service rejects duplicates and the reserved name.

        Args:
            name: Name of the bucket to create
            is_public: Default privacy setting for files added to the bucket

        Returns:
            Response envelope with the created bucket
        """
        check_required("Bucket name", name)
        return self._transport.post(f"{STORAGE_API}/create-bucket", {
            "name": name,
            "isPublic": is_public,
        })

    def list_buckets(self, expression: Optional[Any] = None, options: Optional[OptionsType] = None):
        """
        List buckets matching a query expression.

        Without an expression all buckets are returned. Options may be
        passed as the first argument to leave out the expression.

        Args:
            expression: Filter expression, e.g. ``"isPublic == true"``
            options: BucketListOptions or dict with pagination and sorting

        Returns:
            Response envelope with the matching buckets; with
            ``return_count_info`` the data also carries count information

        Raises:
            InvalidValueError: If expression is not a string or options is
                not an object
        """
        expression_value, options_value = split_listing_args(expression, options, "Bucket")
        return self._transport.post(f"{STORAGE_API}/list-buckets", {
            "expression": expression_value,
            "options": options_value,
        })

    def get_stats(self):
        """Get file count, total size and average/min/max file size for the whole storage."""
        return self._transport.post(f"{STORAGE_API}/stats")

    def search_files(self, expression: Optional[str] = None, options: Optional[OptionsType] = None):
        """
        Search files across all buckets.

        Args:
            expression: Search expression, e.g. ``"size > 1024"``
            options: FileListOptions or dict with pagination and sorting

        Returns:
            Response envelope with the matching files

        Raises:
            InvalidArgumentError: If expression is not given
            InvalidValueError: If options is not an object
        """
        check_required("search expression", expression)

        options_value = None
        if is_options_object(options):
            options_value = options_to_dict(options)
        elif options:
            raise InvalidValueError("File search options need to be an object", field="options")

        return self._transport.post(f"{STORAGE_API}/search-files", {
            "expression": expression,
            "options": options_value,
        })
