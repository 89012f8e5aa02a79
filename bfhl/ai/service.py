"""Single-word answers from the external answer service."""

from structlog import get_logger

from .client import AnswerProvider, DEFAULT_TIMEOUT_SECONDS
from .exceptions import AnswerServiceError


logger = get_logger()

FALLBACK_ANSWER = "Unknown"
TRAILING_PUNCTUATION = ".,!?;:"


def first_word(reply: str) -> str:
    """First whitespace-delimited token of ``reply`` without trailing punctuation.

    Returns ``FALLBACK_ANSWER`` when nothing is left.
    """
    tokens = reply.split()
    word = tokens[0].rstrip(TRAILING_PUNCTUATION) if tokens else ""
    return word or FALLBACK_ANSWER


async def answer_in_one_word(
    provider: AnswerProvider,
    question: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> str:
    """Ask the provider and reduce its reply to a single word.

    Raises:
        AnswerServiceError: Propagated unchanged from the provider.
    """
    try:
        reply = await provider.ask(question, timeout=timeout)
    except AnswerServiceError as e:
        logger.warning("answer_service_failed", error_code=e.code)
        raise
    return first_word(reply)
