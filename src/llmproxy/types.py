"""Shared types and lightweight data containers.

Everything here is request-scoped. Nothing is cached between invocations.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

AdapterKind = Literal["gemini", "openai_style"]
Extractor = Literal["span", "balanced"]
PromptStyle = Literal["labeled", "plain"]

@dataclass
class VendorConfig:
    name: str
    kind: AdapterKind
    endpoint: str
    model: str
    api_key: str = ""
    api_key_env: str = ""
    timeout: int = 30
    temperature: float = 0.7
    # None means "do not send"; the older Gemini route never set topP.
    top_p: Optional[float] = None
    max_tokens: int = 4000
    repair: bool = False
    extractor: Extractor = "span"
    prompt_style: PromptStyle = "labeled"
    append_json_requirements: bool = False

@dataclass
class ProxyRequest:
    system: Optional[str] = None
    messages: List[Dict[str, Any]] = field(default_factory=list)

@dataclass
class ProxyResponse:
    status: int
    # None means "no body at all" (CORS preflight), not JSON null.
    body: Optional[Any] = None
    headers: Dict[str, str] = field(default_factory=dict)
