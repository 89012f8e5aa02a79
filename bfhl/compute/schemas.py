"""Pydantic schemas for compute operations and the response envelope."""

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

from .exceptions import UnknownOperationError
from .validation import (
    ALLOWED_OPERATIONS,
    validate_fibonacci_count,
    validate_integer_array,
    validate_question,
)


class StrictModel(BaseModel):
    """Base model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class FibonacciOperation(StrictModel):
    """Generate the first ``n`` Fibonacci numbers."""

    operation: Literal["fibonacci"] = "fibonacci"
    n: int = Field(..., description="How many numbers to generate")

    @field_validator("n", mode="before")
    @classmethod
    def validate_n(cls, value: Any) -> int:
        """Validate the count before int coercion.

        Raises:
            InvalidInputError: If the count is not an integer in 0..1000.
        """
        return validate_fibonacci_count(value)


class PrimeOperation(StrictModel):
    """Keep only the prime values, in input order."""

    operation: Literal["prime"] = "prime"
    values: list[int] = Field(default_factory=list)

    @field_validator("values", mode="before")
    @classmethod
    def validate_values(cls, value: Any) -> list[int]:
        return validate_integer_array(value, min_length=0)


class LcmOperation(StrictModel):
    """Least common multiple of all values."""

    operation: Literal["lcm"] = "lcm"
    values: list[int]

    @field_validator("values", mode="before")
    @classmethod
    def validate_values(cls, value: Any) -> list[int]:
        """Validate a non-empty bounded array.

        Raises:
            EmptyArrayError: If no values are given.
            InvalidInputError: On the first offending element.
        """
        return validate_integer_array(value, min_length=1)


class HcfOperation(StrictModel):
    """Highest common factor of all values."""

    operation: Literal["hcf"] = "hcf"
    values: list[int]

    @field_validator("values", mode="before")
    @classmethod
    def validate_values(cls, value: Any) -> list[int]:
        return validate_integer_array(value, min_length=1)


class AIOperation(StrictModel):
    """Single-word answer to a natural-language question."""

    operation: Literal["AI"] = "AI"
    question: str

    @field_validator("question", mode="before")
    @classmethod
    def validate_question_field(cls, value: Any) -> str:
        return validate_question(value)


ComputeOperation = Annotated[
    Union[FibonacciOperation, PrimeOperation, LcmOperation, HcfOperation, AIOperation],
    Field(discriminator="operation"),
]

COMPUTE_OPERATION_ADAPTER = TypeAdapter(ComputeOperation)

# Field holding the request payload on each operation model
PAYLOAD_FIELDS = {
    "fibonacci": "n",
    "prime": "values",
    "lcm": "values",
    "hcf": "values",
    "AI": "question",
}


def decode_operation(operation: str, payload: Any) -> ComputeOperation:
    """Validate a payload and build the matching operation variant.

    The field validators raise ``RequestValidationFailure`` subclasses, which
    pydantic passes through unwrapped, so their messages reach the client.

    Args:
        operation: Operation key returned by ``parse_request``.
        payload: Raw payload for that key.

    Returns:
        One of the ``ComputeOperation`` variants.
    """
    if operation not in PAYLOAD_FIELDS:
        raise UnknownOperationError(operation, ALLOWED_OPERATIONS)
    return COMPUTE_OPERATION_ADAPTER.validate_python(
        {"operation": operation, PAYLOAD_FIELDS[operation]: payload}
    )


class ComputeResponse(BaseModel):
    """Uniform response envelope.

    Exactly one of ``data`` and ``error`` is set, decided by ``is_success``.
    ``official_email`` is only present on success.

    Attributes:
        is_success: Whether the request succeeded.
        official_email: Configured service identity.
        data: Operation result on success.
        error: Human-readable message on failure.
    """

    is_success: bool = Field(..., description="Whether the request succeeded")
    official_email: str | None = Field(default=None, description="Service identity")
    data: Any | None = Field(default=None, description="Result on success")
    error: str | None = Field(default=None, description="Error on failure")

    @classmethod
    def success(cls, official_email: str, data: Any) -> "ComputeResponse":
        """Create a successful response.

        Args:
            official_email: Configured service identity.
            data: Operation result.

        Returns:
            ComputeResponse with data populated.
        """
        return cls(is_success=True, official_email=official_email, data=data)

    @classmethod
    def failure(cls, error: str) -> "ComputeResponse":
        """Create a failed response."""
        return cls(is_success=False, error=error)

    def to_content(self) -> dict[str, Any]:
        """Serialize for a JSON response.

        ``data`` stays in a success body even when it is falsy (``0``, ``[]``),
        absent fields are dropped otherwise.
        """
        content: dict[str, Any] = {"is_success": self.is_success}
        if self.is_success:
            if self.official_email is not None:
                content["official_email"] = self.official_email
            content["data"] = self.data
        else:
            content["error"] = self.error or "Internal server error"
        return content


class HealthResponse(BaseModel):
    """Health check payload."""

    is_success: bool = True
    official_email: str
