"""Adapter interface for upstream LLM vendors."""
from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from ..errors import AdapterError, ConfigError
from ..types import ProxyRequest, VendorConfig

class BaseChatAdapter:
    def __init__(self, config: VendorConfig):
        self.config = config

    def generate(self, req: ProxyRequest) -> Dict[str, Any]:
        raise NotImplementedError

    def extract_text(self, data: Any) -> str:
        raise NotImplementedError

    @staticmethod
    def extract_error(data: Any) -> Optional[Any]:
        if not isinstance(data, dict):
            return None
        # An empty {} or [] still marks a vendor error; only scalar blanks don't.
        err = data.get("error")
        if err is None or err is False or err == "" or err == 0:
            return None
        return err

    def _require_api_key(self) -> str:
        if not self.config.api_key:
            raise ConfigError(f"Missing environment variable: {self.config.api_key_env or 'api key'}")
        return self.config.api_key

    def _post(self, url: str, payload: Dict[str, Any], **kwargs) -> Dict[str, Any]:
        """POST and decode the JSON body.

        A structured vendor error body is returned as-is (the handler turns it
        into a 400); anything else that is not a usable JSON object raises.
        """
        try:
            r = requests.post(url, json=payload, timeout=self.config.timeout, **kwargs)
        except requests.RequestException as e:
            raise AdapterError(f"request failed: {e}")

        try:
            data = r.json()
        except ValueError:
            raise AdapterError(f"http {r.status_code}: non-JSON response: {r.text[:800]}")

        if not isinstance(data, dict):
            raise AdapterError(f"http {r.status_code}: unexpected response body type {type(data).__name__}")

        if r.status_code >= 300 and self.extract_error(data) is None:
            raise AdapterError(f"http {r.status_code}: {r.text[:800]}")

        return data
