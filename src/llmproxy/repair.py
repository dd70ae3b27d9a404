"""Best-effort JSON recovery for model output.

Models asked for JSON still wrap it in prose, leave trailing commas, and put
real newlines inside string values. This module recovers the object when it
can and otherwise reports why it could not, without raising.

This file implements:
- extract_json_object(text)            first '{' .. last '}' span, or None
- extract_balanced_json_object(text)   first brace-balanced object, or None
- sanitize_common_breakers(s)          U+2028/U+2029 and trailing commas
- escape_control_chars_in_strings(s)   raw LF/CR/TAB inside strings only
- repair_json_text(text) -> (parsed_or_none, reason_or_none)
- repair(text) -> parsed_or_none
"""
from __future__ import annotations

import json
import math
import re
from typing import Any, Dict, Optional, Tuple

from .logging_util import get_logger

logger = get_logger(__name__)

_TRAILING_COMMA_RE = re.compile(r",\s*([}\]])")

def extract_json_object(text: str) -> Optional[str]:
    if not text:
        return None

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return None
    return text[start : end + 1]

def extract_balanced_json_object(text: str) -> Optional[str]:
    """Return the first balanced {...} starting at the first '{'.

    Braces inside string literals do not count. Returns None when the object
    never closes.
    """
    if not text:
        return None

    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None

def sanitize_common_breakers(s: str) -> str:
    # Not string-aware: a ", }" inside a value is rewritten too.
    s = s.replace("\u2028", "\\n").replace("\u2029", "\\n")
    return _TRAILING_COMMA_RE.sub(r"\1", s)

def escape_control_chars_in_strings(s: str) -> str:
    out = []
    in_string = False
    escaped = False

    for ch in s:
        if not in_string:
            if ch == '"':
                in_string = True
            out.append(ch)
            continue

        if escaped:
            out.append(ch)
            escaped = False
        elif ch == "\\":
            out.append(ch)
            escaped = True
        elif ch == '"':
            out.append(ch)
            in_string = False
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\r":
            continue
        elif ch == "\t":
            out.append("\\t")
        else:
            out.append(ch)

    return "".join(out)

def _reject_constant(name: str):
    raise ValueError(f"non-standard JSON constant: {name}")

def _finite_float(s: str) -> float:
    v = float(s)
    if math.isinf(v) or math.isnan(v):
        raise ValueError(f"number out of range: {s}")
    return v

def _strict_loads(s: str) -> Any:
    return json.loads(s, parse_constant=_reject_constant, parse_float=_finite_float)

_EXTRACTORS = {
    "span": extract_json_object,
    "balanced": extract_balanced_json_object,
}

def repair_json_text(text: str, extractor: str = "span") -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    if text is None:
        return None, "empty text"

    extract = _EXTRACTORS.get(extractor)
    if extract is None:
        return None, f"unknown extractor: {extractor}"

    candidate = extract(str(text))
    if candidate is None:
        return None, "no JSON object braces found"

    cleaned = escape_control_chars_in_strings(sanitize_common_breakers(candidate))

    try:
        obj = _strict_loads(cleaned)
    except (ValueError, RecursionError) as e:
        return None, f"json parse failed after repair: {e}"

    # Both extractors return a {...} slice, so success is always an object.
    return obj, None

def repair(text: str, extractor: str = "span") -> Optional[Dict[str, Any]]:
    obj, reason = repair_json_text(text, extractor=extractor)
    if reason:
        logger.debug("repair fell back to raw text: %s", reason)
    return obj
