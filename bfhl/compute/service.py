"""Service layer for the compute endpoint: validation, dispatch and formatting."""

from typing import Any

from structlog import get_logger

from bfhl.ai.client import AnswerProvider, DEFAULT_TIMEOUT_SECONDS
from bfhl.ai.service import answer_in_one_word
from bfhl.exceptions import ConfigurationError

from .exceptions import RequestValidationFailure
from .operations import fibonacci, filter_primes, hcf_of, lcm_of
from .schemas import (
    AIOperation,
    ComputeOperation,
    ComputeResponse,
    FibonacciOperation,
    HcfOperation,
    LcmOperation,
    PrimeOperation,
    decode_operation,
)
from .validation import parse_request


logger = get_logger()


def validate_request(body: Any) -> ComputeOperation:
    """Run the full validation pipeline on a parsed request body."""
    operation, payload = parse_request(body)
    return decode_operation(operation, payload)


async def execute_operation(
    operation: ComputeOperation,
    provider: AnswerProvider | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> Any:
    """Route a validated operation to its executor.

    Args:
        operation: Validated operation variant.
        provider: Answer provider, None when the AI service is not configured.
        timeout: Answer service timeout in seconds.

    Returns:
        A list for fibonacci/prime, an int for lcm/hcf, a str for AI.

    Raises:
        ConfigurationError: If an AI operation arrives without a provider.
        LcmOverflowError: If the LCM leaves the safe integer range.
        AnswerServiceError: If the answer service fails.
    """
    if isinstance(operation, FibonacciOperation):
        return fibonacci(operation.n)
    if isinstance(operation, PrimeOperation):
        return filter_primes(operation.values)
    if isinstance(operation, LcmOperation):
        return lcm_of(operation.values)
    if isinstance(operation, HcfOperation):
        return hcf_of(operation.values)
    if isinstance(operation, AIOperation):
        if provider is None:
            raise ConfigurationError(message="AI service not configured", setting="GEMINI_API_KEY")
        return await answer_in_one_word(provider, operation.question, timeout=timeout)
    raise ValueError("unsupported operation")


async def handle_compute(
    body: Any,
    official_email: str,
    provider: AnswerProvider | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ComputeResponse:
    """Validate a request body, run its operation and wrap the result.

    This is the main entry point for ``POST /bfhl``. It:
    1. Validates body shape and key set
    2. Validates the operation payload
    3. Executes the operation
    4. Builds the success envelope

    Args:
        body: Parsed JSON body.
        official_email: Configured identity for the envelope.
        provider: Answer provider for AI requests.
        timeout: Answer service timeout in seconds.

    Returns:
        Success envelope.

    Raises:
        RequestValidationFailure: On any validation failure.
        ConfigurationError: If the AI service is not configured.
        AnswerServiceError: If the answer service fails.
    """
    try:
        operation = validate_request(body)
    except RequestValidationFailure as e:
        logger.info("compute_rejected", error_code=e.code)
        raise

    logger.info("compute_dispatched", operation=operation.operation)
    data = await execute_operation(operation, provider=provider, timeout=timeout)
    return ComputeResponse.success(official_email=official_email, data=data)
