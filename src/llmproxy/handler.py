"""ProxyHandler: one inbound request -> at most one upstream call -> one response."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Mapping, Optional

from .adapters import BaseChatAdapter, build_adapter
from .config import load_vendor_config
from .envelope import build_payload, error_response, json_response, preflight_response
from .input_spec import parse_proxy_request
from .types import ProxyResponse, VendorConfig
from .logging_util import get_logger, log_step

logger = get_logger(__name__)

def method_gate(method: Optional[str]) -> Optional[ProxyResponse]:
    """Answer preflight and non-POST requests; None means go ahead."""
    method = (method or "").strip().upper()
    if method == "OPTIONS":
        return preflight_response()
    if method != "POST":
        return error_response(405, "Method not allowed")
    return None

class ProxyHandler:
    def __init__(self, config: VendorConfig, adapter: Optional[BaseChatAdapter] = None):
        self.config = config
        self.adapter = adapter or build_adapter(config)

    @classmethod
    def for_vendor(
        cls,
        vendor: str,
        project_root: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ProxyHandler":
        return cls(load_vendor_config(vendor, project_root=project_root, environ=environ))

    def handle(self, method: Optional[str], body: Any = None, request_id: Optional[str] = None) -> ProxyResponse:
        gated = method_gate(method)
        if gated is not None:
            return gated

        t0 = time.time()
        try:
            log_step(logger, "1", f"parse request (vendor={self.config.name} request_id={request_id})")
            req = parse_proxy_request(body)

            log_step(logger, "2", f"call vendor model={self.config.model}")
            data = self.adapter.generate(req)

            log_step(logger, "3", "normalize response")
            vendor_error = self.adapter.extract_error(data)
            if vendor_error is not None:
                logger.warning("[%s] vendor error: %s", self.config.name, vendor_error)
                return error_response(400, vendor_error)

            text = self.adapter.extract_text(data)
            payload = build_payload(text, self.config.repair, extractor=self.config.extractor)

            logger.info("[%s] done in %dms", self.config.name, int((time.time() - t0) * 1000))
            return json_response(200, payload)

        except Exception as e:
            logger.exception("ProxyHandler.handle failed: %s", e)
            return error_response(500, str(e) or type(e).__name__)
