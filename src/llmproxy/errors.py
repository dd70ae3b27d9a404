class LlmProxyError(Exception):
    pass

class ConfigError(LlmProxyError):
    """Unknown vendor profile, missing credentials or bad profile values."""

class AdapterError(LlmProxyError):
    """The upstream vendor call failed before a usable JSON body came back."""

class ValidationError(LlmProxyError):
    """The inbound request body is not the expected JSON shape."""
