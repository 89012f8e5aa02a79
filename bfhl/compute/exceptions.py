"""Validation exceptions for compute requests."""

from bfhl.exceptions import BfhlError


class RequestValidationFailure(BfhlError):
    """Base exception for rejected compute input. Always a client error."""

    status_code = 400


class InvalidBodyError(RequestValidationFailure):
    """Raised when the body is missing or not a JSON object."""

    def __init__(self):
        super().__init__(message="Invalid request body", code="INVALID_BODY")


class EmptyBodyError(RequestValidationFailure):
    """Raised when the body object has no keys."""

    def __init__(self):
        super().__init__(message="Request body cannot be empty", code="EMPTY_BODY")


class MultipleKeysError(RequestValidationFailure):
    """Raised when the body object has more than one key.

    Attributes:
        keys: Keys found in the body.
    """

    def __init__(self, keys: list[str]):
        super().__init__(message="Request must contain exactly one key", code="MULTIPLE_KEYS")
        self.keys = keys


class UnknownOperationError(RequestValidationFailure):
    """Raised when the single key is not a supported operation.

    Attributes:
        key: The rejected key.
    """

    def __init__(self, key: str, allowed: tuple[str, ...]):
        super().__init__(
            message=f"Invalid key. Allowed keys: {', '.join(allowed)}",
            code="UNKNOWN_OPERATION",
        )
        self.key = key


class InvalidInputError(RequestValidationFailure):
    """Raised when an operation payload violates a type or range constraint."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message=message, code="INVALID_INPUT")
        self.index = index


class EmptyArrayError(RequestValidationFailure):
    """Raised when an operation that needs at least one value gets none."""

    def __init__(self):
        super().__init__(message="Array cannot be empty", code="EMPTY_ARRAY")


class LcmOverflowError(RequestValidationFailure):
    """Raised when an LCM reduction step leaves the safe integer range."""

    def __init__(self):
        super().__init__(message="LCM calculation overflow - values too large", code="OVERFLOW")
