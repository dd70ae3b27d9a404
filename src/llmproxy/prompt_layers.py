"""Prompt assembly per vendor.

Rules:
- Gemini gets a single flattened prompt: the system text plus the first
  user message. Later turns are not forwarded.
- Chat-completions vendors get the messages as sent, with the system prompt
  first and, when the profile asks for it, a final user message spelling out
  the JSON output requirements.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from .types import ProxyRequest
from .logging_util import get_logger

logger = get_logger(__name__)

_DEFAULT_PROJECT_ROOT = Path(__file__).resolve().parents[2]

def _load_json_requirements(project_root: Path) -> str:
    p = project_root / "src" / "prompts" / "json_output_requirements.txt"
    try:
        return p.read_text(encoding="utf-8")
    except OSError:
        logger.warning("JSON requirements prompt not found at %s, using fallback", p)
        return "FINAL OUTPUT REQUIREMENTS:\n- Output ONLY valid JSON.\n- Do NOT include trailing commas.\n"

def first_user_text(req: ProxyRequest) -> str:
    for m in req.messages:
        if m.get("role") == "user":
            return m.get("content") or ""
    return ""

def build_gemini_prompt(req: ProxyRequest, style: str = "labeled") -> str:
    user_text = first_user_text(req)
    if not req.system:
        return user_text

    if style == "plain":
        return f"{req.system}\n\n{user_text}"
    return f"SYSTEM INSTRUCTIONS:\n{req.system}\n\nUSER REQUEST:\n{user_text}"

def build_chat_messages(
    req: ProxyRequest,
    append_json_requirements: bool = False,
    project_root: Optional[Path] = None,
) -> List[Dict[str, Any]]:
    messages: List[Dict[str, Any]] = []
    if req.system:
        messages.append({"role": "system", "content": req.system})
    messages.extend(dict(m) for m in req.messages)

    if append_json_requirements:
        root = project_root or _DEFAULT_PROJECT_ROOT
        messages.append({"role": "user", "content": _load_json_requirements(root)})

    return messages
