"""Inbound request parsing.

Expected body (what the frontend posts):
   {"system": "...optional...", "messages": [{"role": "user", "content": "..."}]}

We ignore unsupported roles in messages:
- Only keep system, user, assistant
- Anything else (tool, developer, junk entries) is dropped
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

from .errors import ValidationError
from .types import ProxyRequest
from .logging_util import get_logger

logger = get_logger(__name__)

_ALLOWED_ROLES = {"system", "user", "assistant"}

def _load_body(body: Union[str, bytes, Dict[str, Any], None]) -> Dict[str, Any]:
    if body is None:
        return {}
    if isinstance(body, dict):
        return body
    if isinstance(body, (bytes, bytearray)):
        body = body.decode("utf-8")
    if not isinstance(body, str):
        raise ValidationError(f"unsupported request body type: {type(body).__name__}")

    s = body.strip()
    if not s:
        return {}
    try:
        data = json.loads(s)
    except ValueError as e:
        raise ValidationError(f"request body is not valid JSON: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("request body must be a JSON object")
    return data

def _to_text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, str):
        return v
    return json.dumps(v, ensure_ascii=False)

def _sanitize_messages(messages: Any) -> List[Dict[str, Any]]:
    if messages is None:
        return []
    if not isinstance(messages, list):
        raise ValidationError("messages must be an array")

    out: List[Dict[str, Any]] = []
    for m in messages:
        if not isinstance(m, dict):
            continue
        role = str(m.get("role") or "").strip().lower()
        if role not in _ALLOWED_ROLES:
            logger.debug("dropping message with role=%r", m.get("role"))
            continue
        out.append({"role": role, "content": _to_text(m.get("content"))})
    return out

def _normalize_system(v: Any) -> Optional[str]:
    if v is None:
        return None
    s = _to_text(v)
    return s if s.strip() else None

def parse_proxy_request(body: Union[str, bytes, Dict[str, Any], None]) -> ProxyRequest:
    data = _load_body(body)
    req = ProxyRequest(
        system=_normalize_system(data.get("system")),
        messages=_sanitize_messages(data.get("messages")),
    )
    logger.debug("Parsed ProxyRequest: system=%s messages=%d", bool(req.system), len(req.messages))
    return req
