"""
Custom exceptions for the CloudBucket SDK.

Only local failures are raised as exceptions: bad arguments passed by the
caller and broken client configuration. Anything the storage service
reports comes back inside the response envelope instead.
"""


class CloudBucketError(Exception):
    """Base exception for all CloudBucket SDK errors."""

    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self):
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class ClientError(CloudBucketError):
    """Raised when the caller makes an invalid request."""

    def __init__(self, message: str = "Invalid client request", error_code: str = "client_error", **kwargs):
        super().__init__(message, error_code=error_code, **kwargs)


class InvalidArgumentError(ClientError):
    """Raised when a required parameter is missing or empty."""

    def __init__(self, message: str = "Missing required parameter", field: str = None, **kwargs):
        super().__init__(message, error_code="missing_required_param", **kwargs)
        self.field = field


class InvalidValueError(ClientError):
    """Raised when an optional parameter has the wrong type."""

    def __init__(self, message: str = "Invalid parameter value", field: str = None, **kwargs):
        super().__init__(message, error_code="invalid_value", **kwargs)
        self.field = field


class ConfigurationError(CloudBucketError):
    """Raised when SDK configuration is invalid."""

    def __init__(self, message: str = "Invalid configuration", config_key: str = None, **kwargs):
        super().__init__(message, error_code="CONFIG_ERROR", **kwargs)
        self.config_key = config_key
