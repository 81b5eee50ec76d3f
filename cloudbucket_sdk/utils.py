"""
Utility functions for the CloudBucket SDK.

Argument checks shared by the managers, options normalization and
formatting helpers used by the CLI.
"""

import math
from typing import Any, Dict, Optional, Union

from .exceptions import InvalidArgumentError, InvalidValueError
from .models import ListOptions

OptionsType = Union[ListOptions, Dict[str, Any]]


def check_required(field_name: str, value: Any) -> None:
    """
    Ensure a required parameter was given.

    Args:
        field_name: Human-readable name used in the error message
        value: The value to check

    Raises:
        InvalidArgumentError: If the value is None or empty
    """
    if value is None or (isinstance(value, (str, list, tuple, dict)) and len(value) == 0):
        raise InvalidArgumentError(
            f"{field_name} is a required parameter, missing argument '{field_name}'",
            field=field_name,
        )


def is_options_object(value: Any) -> bool:
    """Return True for values that can be sent as listing options."""
    return isinstance(value, (ListOptions, dict))


def options_to_dict(options: Optional[OptionsType]) -> Optional[Dict[str, Any]]:
    """Convert listing options to their wire form; dicts are sent as given."""
    if isinstance(options, ListOptions):
        return options.to_dict()
    return options


def split_listing_args(
    expression: Any,
    options: Any,
    subject: str,
) -> tuple:
    """
    Resolve the ``(expression, options)`` overload of the listing operations.

    A string first argument is the filter expression; an options object as
    first argument stands for the options, so the expression can be left
    out. Options objects are sent even when empty; empty strings and other
    falsy values count as absent.

    Args:
        expression: Filter expression or options object
        options: Options object
        subject: What is being listed, used in error messages

    Returns:
        Tuple of ``(expression, options_dict)`` with None for absent values

    Raises:
        InvalidValueError: If either argument has an unsupported type
    """
    expression_value = None
    options_value = None

    if is_options_object(expression):
        options_value = expression
    elif expression:
        if not isinstance(expression, str):
            raise InvalidValueError(
                f"{subject} listing expression needs to be a string",
                field="expression",
            )
        expression_value = expression

    if is_options_object(options):
        options_value = options
    elif options:
        raise InvalidValueError(
            f"{subject} listing options need to be an object",
            field="options",
        )

    return expression_value, options_to_dict(options_value)


def format_file_size(size_bytes: Union[int, float]) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB")
    """
    if not size_bytes or size_bytes < 1:
        return f"{size_bytes or 0} B"

    size_names = ["B", "KB", "MB", "GB", "TB", "PB"]
    i = int(math.floor(math.log(size_bytes, 1024)))

    if i >= len(size_names):
        i = len(size_names) - 1

    p = math.pow(1024, i)
    size = round(size_bytes / p, 2)

    return f"{size} {size_names[i]}"
