"""Vendor profiles.

A profile is everything one handler needs to talk to one upstream API. The
built-in defaults reproduce the deployed routes; vendors.yaml may override
any field except the API key, which always comes from the environment:

vendors.yaml:
  vendors:
    gemini:
      model: gemini-2.5-flash
      repair: true
    groq:
      extractor: balanced

The environment is read here and nowhere else. Adapters only ever see the
resulting VendorConfig.
"""
from __future__ import annotations

import os
from dataclasses import fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import ConfigError
from .types import VendorConfig
from .logging_util import get_logger

logger = get_logger(__name__)

_DEFAULT_PROJECT_ROOT = Path(__file__).resolve().parents[2]

_GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models"
_GROQ_ENDPOINT = "https://api.groq.com/openai/v1/chat/completions"

DEFAULT_VENDORS: Dict[str, Dict[str, Any]] = {
    "gemini": {
        "kind": "gemini",
        "endpoint": _GEMINI_ENDPOINT,
        "model": "gemini-2.5-flash",
        "api_key_env": "GEMINI_API_KEY",
        "model_env": "GEMINI_MODEL",
        "temperature": 0.8,
        "top_p": 0.95,
        "max_tokens": 4000,
        "prompt_style": "labeled",
        "repair": False,
    },
    # The frontend's original "claude" route, served by an older Gemini model.
    "claude": {
        "kind": "gemini",
        "endpoint": _GEMINI_ENDPOINT,
        "model": "gemini-2.0-flash",
        "api_key_env": "GEMINI_API_KEY",
        "temperature": 0.7,
        "top_p": None,
        "max_tokens": 4000,
        "prompt_style": "plain",
        "repair": False,
    },
    "groq": {
        "kind": "openai_style",
        "endpoint": _GROQ_ENDPOINT,
        "model": "meta-llama/llama-4-maverick-17b-128e-instruct",
        "api_key_env": "GROQ_API_KEY",
        "model_env": "GROQ_MODEL",
        "temperature": 0.8,
        "top_p": 0.95,
        "max_tokens": 5000,
        "append_json_requirements": True,
        "repair": True,
    },
}

_KINDS = ("gemini", "openai_style")
_EXTRACTORS = ("span", "balanced")
_PROMPT_STYLES = ("labeled", "plain")
_CONFIG_FIELDS = {f.name for f in fields(VendorConfig)}

def sanitize_api_key(raw: str) -> str:
    # Copy/paste artifacts: quotes, backticks and smart quotes around the key.
    k = (raw or "").strip()
    k = k.strip(' "\'`')
    k = k.strip("“”‘’")
    return k

def _load_yaml(path: Path) -> Dict:
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error("Failed to load YAML: %s (%s)", path, e)
        return {}
    if not isinstance(data, dict):
        logger.error("Ignoring %s: top level is not a mapping", path)
        return {}
    return data

def vendors_file(project_root: Path, environ: Mapping[str, str]) -> Path:
    override = (environ.get("LLMPROXY_VENDORS_FILE") or "").strip()
    if override:
        return Path(override)
    return project_root / "src" / "configs" / "vendors.yaml"

def load_overrides(project_root: Path, environ: Mapping[str, str]) -> Dict[str, Dict[str, Any]]:
    vendors = _load_yaml(vendors_file(project_root, environ)).get("vendors") or {}
    if not isinstance(vendors, dict):
        logger.error("Ignoring vendors overrides: 'vendors' is not a mapping")
        return {}
    return vendors

def _validate(cfg: VendorConfig) -> VendorConfig:
    if cfg.kind not in _KINDS:
        raise ConfigError(f"[{cfg.name}] unsupported adapter kind: {cfg.kind}")
    if cfg.extractor not in _EXTRACTORS:
        raise ConfigError(f"[{cfg.name}] unsupported extractor: {cfg.extractor}")
    if cfg.prompt_style not in _PROMPT_STYLES:
        raise ConfigError(f"[{cfg.name}] unsupported prompt_style: {cfg.prompt_style}")
    if not cfg.endpoint or not cfg.model:
        raise ConfigError(f"[{cfg.name}] endpoint and model are required")
    return cfg

def available_vendors(project_root: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None):
    env = os.environ if environ is None else environ
    root = project_root or _DEFAULT_PROJECT_ROOT
    return sorted(set(DEFAULT_VENDORS) | set(load_overrides(root, env)))

def load_vendor_config(
    name: str,
    project_root: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> VendorConfig:
    env = os.environ if environ is None else environ
    root = project_root or _DEFAULT_PROJECT_ROOT
    vendor = (name or "").strip().lower()

    merged: Dict[str, Any] = dict(DEFAULT_VENDORS.get(vendor) or {})
    override = load_overrides(root, env).get(vendor) or {}
    if not isinstance(override, dict):
        raise ConfigError(f"[{vendor}] profile override must be a mapping")
    merged.update(override)

    if not merged:
        raise ConfigError(f"Unknown vendor: {name}")

    model_env = merged.pop("model_env", None)
    if model_env and (env.get(model_env) or "").strip():
        merged["model"] = env[model_env].strip()

    unknown = set(merged) - _CONFIG_FIELDS
    if unknown:
        logger.warning("[%s] ignoring unknown profile keys: %s", vendor, sorted(unknown))
    values = {k: v for k, v in merged.items() if k in _CONFIG_FIELDS}
    values.pop("api_key", None)
    values["name"] = vendor

    try:
        cfg = VendorConfig(**values)
    except TypeError as e:
        raise ConfigError(f"[{vendor}] incomplete profile: {e}")

    if cfg.api_key_env:
        cfg.api_key = sanitize_api_key(env.get(cfg.api_key_env) or "")

    return _validate(cfg)
