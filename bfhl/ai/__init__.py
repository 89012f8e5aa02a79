"""AI module - single-word answers from the Gemini API."""

from .client import AnswerProvider, GeminiAnswerClient, build_prompt
from .exceptions import (
    AnswerServiceError,
    AnswerServiceRejectedError,
    AnswerServiceTimeoutError,
    AnswerServiceUnavailableError,
    AnswerServiceInvalidResponseError,
)
from .service import answer_in_one_word, first_word


__all__ = [
    # Client
    "AnswerProvider",
    "GeminiAnswerClient",
    "build_prompt",
    # Exceptions
    "AnswerServiceError",
    "AnswerServiceRejectedError",
    "AnswerServiceTimeoutError",
    "AnswerServiceUnavailableError",
    "AnswerServiceInvalidResponseError",
    # Service
    "answer_in_one_word",
    "first_word",
]
