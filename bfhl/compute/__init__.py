"""Compute module - request validation and arithmetic operations."""

from .schemas import (
    AIOperation,
    ComputeOperation,
    ComputeResponse,
    FibonacciOperation,
    HcfOperation,
    HealthResponse,
    LcmOperation,
    PrimeOperation,
    decode_operation,
)
from .exceptions import (
    RequestValidationFailure,
    InvalidBodyError,
    EmptyBodyError,
    MultipleKeysError,
    UnknownOperationError,
    InvalidInputError,
    EmptyArrayError,
    LcmOverflowError,
)
from .validation import parse_request
from .service import execute_operation, handle_compute, validate_request
from .router import router


__all__ = [
    # Schemas
    "AIOperation",
    "ComputeOperation",
    "ComputeResponse",
    "FibonacciOperation",
    "HcfOperation",
    "HealthResponse",
    "LcmOperation",
    "PrimeOperation",
    # Exceptions
    "RequestValidationFailure",
    "InvalidBodyError",
    "EmptyBodyError",
    "MultipleKeysError",
    "UnknownOperationError",
    "InvalidInputError",
    "EmptyArrayError",
    "LcmOverflowError",
    # Validation
    "decode_operation",
    "parse_request",
    "validate_request",
    # Service
    "execute_operation",
    "handle_compute",
    # Router
    "router",
]
