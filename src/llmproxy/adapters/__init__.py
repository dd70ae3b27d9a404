from ..errors import ConfigError
from ..types import VendorConfig
from .base import BaseChatAdapter
from .gemini import GeminiAdapter
from .openai_style import OpenAIStyleAdapter

_ADAPTERS = {
    "gemini": GeminiAdapter,
    "openai_style": OpenAIStyleAdapter,
}

def build_adapter(config: VendorConfig) -> BaseChatAdapter:
    cls = _ADAPTERS.get(config.kind)
    if cls is None:
        raise ConfigError(f"Unsupported adapter kind: {config.kind}")
    return cls(config)

__all__ = ["BaseChatAdapter", "GeminiAdapter", "OpenAIStyleAdapter", "build_adapter"]
