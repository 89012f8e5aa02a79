"""FastAPI router for the compute endpoint."""

import json
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from bfhl.ai.client import GeminiAnswerClient
from bfhl.config import Settings, get_settings, require_official_email
from bfhl.dependencies import get_answer_provider
from bfhl.exceptions import InvalidJSONError

from .service import handle_compute


router = APIRouter(tags=["compute"])


def _reject_constant(name: str) -> float:
    # NaN, Infinity and -Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name}")


def is_json_content_type(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


async def read_json_body(request: Request) -> object:
    """Parse the request body.

    An empty body is None. A non-empty body with a non-JSON Content-Type is
    left unparsed and read as an empty object.

    Raises:
        InvalidJSONError: If the body is not valid JSON.
    """
    raw = await request.body()
    if not raw.strip():
        return None
    if not is_json_content_type(request.headers.get("content-type", "")):
        return {}
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except ValueError:
        raise InvalidJSONError()


@router.post("/bfhl")
async def compute_endpoint(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    provider: Annotated[GeminiAnswerClient | None, Depends(get_answer_provider)],
) -> JSONResponse:
    """Run exactly one of fibonacci, prime, lcm, hcf or AI.

    The body is a JSON object with a single operation key. Failures are
    raised as ``BfhlError`` subclasses and turned into the error envelope
    by the application's exception handlers.
    """
    official_email = require_official_email(settings)
    body = await read_json_body(request)

    response = await handle_compute(
        body,
        official_email=official_email,
        provider=provider,
        timeout=settings.AI_TIMEOUT_SECONDS,
    )
    return JSONResponse(status_code=200, content=response.to_content())
