"""HTTP client for the Gemini answer service."""

from typing import Any, Protocol

import httpx

from .exceptions import (
    AnswerServiceInvalidResponseError,
    AnswerServiceRejectedError,
    AnswerServiceTimeoutError,
    AnswerServiceUnavailableError,
)


DEFAULT_TIMEOUT_SECONDS = 10.0

PROMPT_TEMPLATE = "Answer the following question with a single word only: {question}"


class AnswerProvider(Protocol):
    """Anything that can answer a question with raw reply text."""

    async def ask(self, question: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
        ...


def build_prompt(question: str) -> str:
    return PROMPT_TEMPLATE.format(question=question)


def extract_reply_text(payload: Any) -> str | None:
    """Pull ``candidates[0].content.parts[0].text`` out of a Gemini reply."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text:
        return None
    return text


class GeminiAnswerClient:
    """Answer provider backed by the Gemini ``generateContent`` endpoint.

    Attributes:
        client: Shared HTTP client.
        api_key: Gemini API key.
        model: Model name, e.g. ``gemini-1.5-flash``.
        base_url: API root including the version segment.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        model: str,
        base_url: str,
    ) -> None:
        self.client = client
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def ask(self, question: str, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
        """Send a question and return the raw reply text.

        Args:
            question: Validated user question.
            timeout: Request timeout in seconds.

        Returns:
            Reply text from the first candidate.

        Raises:
            AnswerServiceTimeoutError: If the service doesn't respond in time.
            AnswerServiceUnavailableError: If the connection fails.
            AnswerServiceRejectedError: If the service returns HTTP error status.
            AnswerServiceInvalidResponseError: If the reply holds no text.
        """
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        body = {"contents": [{"parts": [{"text": build_prompt(question)}]}]}

        try:
            response = await self.client.post(
                self.endpoint,
                json=body,
                headers=headers,
                timeout=timeout,
            )
        except httpx.TimeoutException:
            raise AnswerServiceTimeoutError(timeout_seconds=timeout)
        except httpx.RequestError as e:
            raise AnswerServiceUnavailableError(reason=f"Request failed: {e}")

        if response.status_code >= 400:
            raise AnswerServiceRejectedError(status_code_upstream=response.status_code)

        try:
            payload = response.json()
        except ValueError:
            raise AnswerServiceInvalidResponseError()

        text = extract_reply_text(payload)
        if text is None:
            raise AnswerServiceInvalidResponseError()
        return text
