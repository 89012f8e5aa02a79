"""Global dependencies for the application."""

from typing import Annotated

import httpx
from fastapi import Depends, Request

from .ai.client import GeminiAnswerClient
from .config import Settings, get_settings


async def get_http_client(request: Request) -> httpx.AsyncClient:
    """Dependency to get the global shared HTTP client.

    This client is initialized in main.py lifespan and shared across requests
    to enable connection pooling (keep-alive).

    Args:
        request: The FastAPI request object.

    Returns:
        The global httpx.AsyncClient instance.
    """
    return request.app.state.http_client


async def get_answer_provider(
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> GeminiAnswerClient | None:
    """Build the Gemini answer provider, or None when no API key is set.

    A missing key only fails requests that actually use the AI operation.
    """
    if not settings.GEMINI_API_KEY:
        return None
    return GeminiAnswerClient(
        client=client,
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        base_url=settings.GEMINI_BASE_URL,
    )
