"""Request and per-operation validation for the compute endpoint.

Validation runs in a fixed order and stops at the first failure:

1. body shape (a JSON object),
2. key set (exactly one key, drawn from ``ALLOWED_OPERATIONS``),
3. payload shape for that operation (type, range, cardinality).

Steps 1 and 2 live in ``parse_request``. The step 3 helpers are called by the
field validators of the operation models in ``schemas``.
"""

from typing import Any

from .exceptions import (
    EmptyArrayError,
    EmptyBodyError,
    InvalidBodyError,
    InvalidInputError,
    MultipleKeysError,
    UnknownOperationError,
)


ALLOWED_OPERATIONS = ("fibonacci", "prime", "lcm", "hcf", "AI")

# Largest integer a JSON number holds without precision loss in IEEE doubles
MAX_SAFE_INTEGER = 2**53 - 1

MAX_FIBONACCI_INPUT = 1000
MAX_ARRAY_LENGTH = 1000
MAX_ARRAY_VALUE = 1_000_000
MAX_AI_QUESTION_LENGTH = 1000


def as_safe_integer(value: Any) -> int | None:
    """Return ``value`` as an int when it is a safe integer, else None.

    JSON booleans are rejected. Floats are accepted only when integral,
    so ``5.0`` is ``5`` while ``5.5``, ``NaN`` and ``Infinity`` are rejected.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        candidate = value
    elif isinstance(value, float):
        if not value.is_integer():
            return None
        candidate = int(value)
    else:
        return None
    if abs(candidate) > MAX_SAFE_INTEGER:
        return None
    return candidate


def parse_request(body: Any) -> tuple[str, Any]:
    """Extract the single ``(operation, payload)`` pair from a request body.

    Args:
        body: Parsed JSON body (None when the request had no body).

    Returns:
        The operation key and its raw payload.

    Raises:
        InvalidBodyError: If the body is missing or not an object.
        EmptyBodyError: If the object has no keys.
        MultipleKeysError: If the object has more than one key.
        UnknownOperationError: If the key is not a supported operation.
    """
    if body is None or not isinstance(body, dict):
        raise InvalidBodyError()
    keys = list(body)
    if not keys:
        raise EmptyBodyError()
    if len(keys) > 1:
        raise MultipleKeysError(keys)
    key = keys[0]
    if key not in ALLOWED_OPERATIONS:
        raise UnknownOperationError(key, ALLOWED_OPERATIONS)
    return key, body[key]


def validate_fibonacci_count(payload: Any) -> int:
    n = as_safe_integer(payload)
    if n is None:
        raise InvalidInputError("Fibonacci input must be a valid integer")
    if n < 0:
        raise InvalidInputError("Fibonacci input must be non-negative")
    if n > MAX_FIBONACCI_INPUT:
        raise InvalidInputError(f"Fibonacci input exceeds maximum of {MAX_FIBONACCI_INPUT}")
    return n


def validate_integer_array(payload: Any, min_length: int = 1) -> list[int]:
    """Validate a bounded integer array.

    Args:
        payload: Raw payload value.
        min_length: 0 to allow an empty array, 1 to reject it.

    Returns:
        The values as ints.

    Raises:
        InvalidInputError: On a non-list, an oversized list, or the first
            offending element (non-integer or out of magnitude).
        EmptyArrayError: If the list is empty and ``min_length`` > 0.
    """
    if not isinstance(payload, list):
        raise InvalidInputError("Input must be an array")
    if not payload and min_length > 0:
        raise EmptyArrayError()
    if len(payload) > MAX_ARRAY_LENGTH:
        raise InvalidInputError(f"Array length exceeds maximum of {MAX_ARRAY_LENGTH}")

    values = []
    for index, item in enumerate(payload):
        value = as_safe_integer(item)
        if value is None:
            raise InvalidInputError(f"Invalid integer at index {index}", index=index)
        if abs(value) > MAX_ARRAY_VALUE:
            raise InvalidInputError(
                f"Value at index {index} exceeds maximum allowed value", index=index
            )
        values.append(value)
    return values


def validate_question(payload: Any) -> str:
    if not isinstance(payload, str):
        raise InvalidInputError("AI input must be a string")
    if not payload.strip():
        raise InvalidInputError("AI question cannot be empty")
    if len(payload) > MAX_AI_QUESTION_LENGTH:
        raise InvalidInputError(
            f"AI question exceeds maximum length of {MAX_AI_QUESTION_LENGTH}"
        )
    return payload

