"""AWS Lambda entrypoint.

Design goals:
- Keep this file small and stable.
- Delegate all real logic to src/llmproxy so the same code serves Lambda and
  the local CLI.

One function can serve every route (lambda_handler picks the vendor from the
last path segment: /api/gemini, /api/groq, /api/claude), or each route can be
wired to its own handler (gemini_handler, groq_handler, claude_handler).

Accepted event shapes:
1) API Gateway REST:  {"httpMethod": "POST", "path": "/api/groq", "body": "{...}"}
2) API Gateway HTTP:  {"requestContext": {"http": {"method": "POST"}}, "rawPath": "/api/groq", "body": "..."}
3) Direct invoke / local test (event itself is the JSON body, method POST):
   {"system": "...", "messages": [{"role": "user", "content": "hi"}]}

Return: {"statusCode": ..., "headers": {...}, "body": "<json>" or ""}
"""
import base64
import json
import os
from typing import Any, Dict, Optional

from src.llmproxy.envelope import error_response
from src.llmproxy.handler import ProxyHandler, method_gate
from src.llmproxy.types import ProxyResponse
from src.llmproxy.logging_util import get_logger

logger = get_logger(__name__)

_DEFAULT_VENDOR = "gemini"

def _event_method(event: Dict[str, Any]) -> Optional[str]:
    method = event.get("httpMethod")
    if method:
        return method
    http = (event.get("requestContext") or {}).get("http") or {}
    return http.get("method")

def _event_body(event: Dict[str, Any]) -> Any:
    if not _event_method(event):
        return event.get("body", event)

    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        body = base64.b64decode(body).decode("utf-8")
    return body

def vendor_from_event(event: Dict[str, Any]) -> str:
    path = event.get("rawPath") or event.get("path") or ""
    segment = path.rstrip("/").rsplit("/", 1)[-1].strip().lower()
    if segment:
        return segment
    return (os.environ.get("LLMPROXY_VENDOR") or _DEFAULT_VENDOR).strip().lower()

def to_lambda_response(resp: ProxyResponse) -> Dict[str, Any]:
    body = "" if resp.body is None else json.dumps(resp.body, ensure_ascii=False)
    return {"statusCode": resp.status, "headers": dict(resp.headers), "body": body}

def _dispatch(vendor: str, event: Any, context: Any) -> Dict[str, Any]:
    try:
        if not isinstance(event, dict):
            event = {}
        method = _event_method(event) or "POST"

        # Preflight must not depend on the vendor profile loading.
        gated = method_gate(method)
        if gated is not None:
            return to_lambda_response(gated)

        handler = ProxyHandler.for_vendor(vendor)
        resp = handler.handle(method, _event_body(event), request_id=getattr(context, "aws_request_id", None))
        return to_lambda_response(resp)

    except Exception as e:
        logger.exception("lambda_handler fatal error: %s", e)
        return to_lambda_response(error_response(500, str(e) or type(e).__name__))

def make_lambda_handler(vendor: str):
    def handler(event: Dict[str, Any], context: Any):
        return _dispatch(vendor, event, context)

    handler.__name__ = f"{vendor}_handler"
    return handler

gemini_handler = make_lambda_handler("gemini")
groq_handler = make_lambda_handler("groq")
claude_handler = make_lambda_handler("claude")

def lambda_handler(event: Dict[str, Any], context: Any):
    vendor = vendor_from_event(event) if isinstance(event, dict) else _DEFAULT_VENDOR
    return _dispatch(vendor, event, context)
