"""Base exceptions for the BFHL service."""


class BfhlError(Exception):
    """Base exception for all BFHL service errors.

    Attributes:
        message: Client-safe error message placed in the response envelope.
        code: Machine-readable error code used in logs.
        status_code: HTTP status returned to the client.
    """

    status_code: int = 500

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ConfigurationError(BfhlError):
    """Raised when a required setting is missing."""

    status_code = 500

    def __init__(self, message: str = "Server configuration error", setting: str = ""):
        super().__init__(message=message, code="CONFIGURATION_ERROR")
        self.setting = setting


class RouteNotFoundError(BfhlError):
    """Raised for unknown routes or unsupported methods."""

    status_code = 404

    def __init__(self, path: str = ""):
        super().__init__(message="Route not found", code="ROUTE_NOT_FOUND")
        self.path = path


class InvalidJSONError(BfhlError):
    """Raised when the request body is not parseable JSON."""

    status_code = 400

    def __init__(self):
        super().__init__(message="Invalid JSON", code="INVALID_JSON")


class PayloadTooLargeError(BfhlError):
    """Raised when the request body exceeds the configured size limit.

    Attributes:
        max_bytes: Maximum allowed size.
    """

    status_code = 413

    def __init__(self, max_bytes: int):
        super().__init__(message="Request body too large", code="PAYLOAD_TOO_LARGE")
        self.max_bytes = max_bytes
