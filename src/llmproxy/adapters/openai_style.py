"""OpenAI-style chat.completions adapter (Groq)."""
from __future__ import annotations

from typing import Any, Dict

from .base import BaseChatAdapter
from ..prompt_layers import build_chat_messages
from ..types import ProxyRequest

class OpenAIStyleAdapter(BaseChatAdapter):
    def build_payload(self, req: ProxyRequest) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.config.model,
            "messages": build_chat_messages(req, append_json_requirements=self.config.append_json_requirements),
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }
        if self.config.top_p is not None:
            payload["top_p"] = self.config.top_p
        # No stop sequences: they truncate JSON mid-object.
        return payload

    def generate(self, req: ProxyRequest) -> Dict[str, Any]:
        api_key = self._require_api_key()

        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        return self._post(self.config.endpoint, self.build_payload(req), headers=headers)

    def extract_text(self, data: Any) -> str:
        if not isinstance(data, dict):
            return ""
        choices = data.get("choices") or []
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            return ""
        msg = choices[0].get("message") or {}
        if not isinstance(msg, dict):
            return ""
        return str(msg.get("content") or "")
