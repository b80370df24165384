"""Response normalization: raw httpx response -> Result."""

from __future__ import annotations

import json
from typing import Any, Optional

import httpx

from .models import Result


def is_json_content_type(content_type: Optional[str]) -> bool:
    """Check whether a Content-Type header declares JSON.

    Matches ``application/json`` and structured ``+json`` suffixes
    (``application/problem+json``), ignoring parameters and case.
    """
    if not content_type:
        return False
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or media_type.endswith("+json")


def parse_body(content_type: Optional[str], text: str) -> Any:
    """Decode JSON bodies, fall back to the raw text.

    Never raises: a JSON content type with an undecodable body yields
    the text unchanged.
    """
    if is_json_content_type(content_type):
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text


def normalize_response(response: httpx.Response, elapsed_ms: float = 0.0) -> Result:
    """Build a Result from an httpx response."""
    content_type = response.headers.get("content-type")
    return Result(
        status=response.status_code,
        body=parse_body(content_type, response.text),
        headers={k.lower(): v for k, v in response.headers.items()},
        elapsed_ms=elapsed_ms,
    )
