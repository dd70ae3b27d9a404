"""Canonical response shapes the frontend understands.

Whatever vendor served the request, the frontend gets either the repaired
JSON object itself or the Claude-style text envelope
{"content": [{"type": "text", "text": ...}]}.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from .repair import repair
from .types import ProxyResponse

CORS_HEADERS = {"Access-Control-Allow-Origin": "*"}

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

def text_envelope(text: str) -> Dict[str, Any]:
    return {"content": [{"type": "text", "text": text}]}

def error_envelope(error: Any) -> Dict[str, Any]:
    return {"error": error}

def build_payload(text: str, repair_enabled: bool, extractor: str = "span") -> Dict[str, Any]:
    """Post-process vendor text into the response body.

    With repair enabled the parsed object is returned when recovery works;
    every other case degrades to the text envelope.
    """
    if repair_enabled:
        parsed = repair(text, extractor=extractor)
        if parsed is not None:
            return parsed
    return text_envelope(text)

def json_response(status: int, body: Any) -> ProxyResponse:
    headers = {"Content-Type": "application/json"}
    headers.update(CORS_HEADERS)
    return ProxyResponse(status=status, body=body, headers=headers)

def preflight_response() -> ProxyResponse:
    return ProxyResponse(status=200, body=None, headers=dict(PREFLIGHT_HEADERS))

def error_response(status: int, error: Optional[Any]) -> ProxyResponse:
    return json_response(status, error_envelope(error))
