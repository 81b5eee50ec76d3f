"""
Bucket-scoped operations.

A :class:`BucketManager` is bound to one bucket name or id and forwards
bucket and file requests through the transport it was created with.
"""

from typing import Any, List, Optional

from .transport import Transport
from .utils import OptionsType, check_required, split_listing_args

BUCKET_API = "/_api/rest/v1/storage/bucket"


class BucketManager:
    """
    Manages a single bucket and the files it contains.

    Methods follow the calling convention of
    :class:`~cloudbucket_sdk.storage.StorageManager`: arguments are checked
    right away and the transport's result is returned as is, so with an
    async transport the result must be awaited.
    """

    def __init__(self, name_or_id: str, transport: Transport):
        self.name_or_id = name_or_id
        self.transport = transport

    def __repr__(self):
        return f"BucketManager({self.name_or_id!r})"

    def _post(self, action: str, **fields: Any):
        body = {"bucket": self.name_or_id}
        body.update(fields)
        return self.transport.post(f"{BUCKET_API}/{action}", body)

    def exists(self):
        """Check whether the bucket exists."""
        return self._post("exists")

    def get_info(self, detailed: bool = False):
        """
        Get bucket metadata.

        Args:
            detailed: Also return file count and total size of the bucket
        """
        return self._post("get", detailed=detailed)

    def empty(self):
        """Delete all files in the bucket, keeping the bucket itself."""
        return self._post("empty")

    def rename(self, new_name: str):
        """Rename the bucket. The service refuses to rename ``root``."""
        check_required("new name", new_name)
        return self._post("rename", newName=new_name)

    def delete(self):
        """Delete the bucket and all its files."""
        return self._post("delete")

    def make_public(self, include_files: bool = False):
        """Set the default privacy of the bucket to public."""
        return self._post("make-public", includeFiles=include_files)

    def make_private(self, include_files: bool = False):
        """Set the default privacy of the bucket to private."""
        return self._post("make-private", includeFiles=include_files)

    def list_files(self, expression: Optional[Any] = None, options: Optional[OptionsType] = None):
        """
        List files in the bucket, optionally filtered by a query expression.

        The first argument may be given as an options object to skip the
        expression.
        """
        expression_value, options_value = split_listing_args(expression, options, "File")
        return self._post("list-files", expression=expression_value, options=options_value)

    def delete_files(self, file_names_or_ids: List[str]):
        """Delete the listed files from the bucket."""
        check_required("file names or ids", file_names_or_ids)
        return self._post("delete-files", filenamesOrIds=list(file_names_or_ids))
