"""Gemini REST adapter (generateContent)."""
from __future__ import annotations

import hashlib
from typing import Any, Dict

from .base import BaseChatAdapter
from ..prompt_layers import build_gemini_prompt
from ..types import ProxyRequest
from ..logging_util import get_logger

logger = get_logger(__name__)

class GeminiAdapter(BaseChatAdapter):
    def build_payload(self, req: ProxyRequest) -> Dict[str, Any]:
        prompt = build_gemini_prompt(req, style=self.config.prompt_style)

        generation_config: Dict[str, Any] = {"temperature": self.config.temperature}
        if self.config.top_p is not None:
            generation_config["topP"] = self.config.top_p
        generation_config["maxOutputTokens"] = self.config.max_tokens

        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    def generate(self, req: ProxyRequest) -> Dict[str, Any]:
        api_key = self._require_api_key()
        sha8 = hashlib.sha256(api_key.encode("utf-8")).hexdigest()[:8]
        logger.debug("[GEMINI_KEY] len=%d sha8=%s", len(api_key), sha8)

        url = f"{self.config.endpoint.rstrip('/')}/{self.config.model}:generateContent"
        headers = {"Content-Type": "application/json"}
        return self._post(url, self.build_payload(req), headers=headers, params={"key": api_key})

    def extract_text(self, data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates") or [{}]
        first = candidates[0] if isinstance(candidates, list) and isinstance(candidates[0], dict) else {}
        content = first.get("content") or {}
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        return "".join(str(p.get("text") or "") for p in parts if isinstance(p, dict))
