"""
Error kinds raised by the attribute provider.

Every kind is a terminal failure for the request that triggered it and is
answered with a generic server error; the distinct ``code`` is kept for logs
and metrics.
"""

from typing import Dict, Any, Optional
import sys
import os

# Add shared directory to path
sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))

from shared.errors import AccessLayerException


class ProviderError(AccessLayerException):
    """Base class for attribute provider failures."""

    status_code = 500


class ConfigError(ProviderError):
    """Attribute policy rejected a request or settings are inconsistent."""

    def __init__(self, message: str = "Configuration error", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIG_ERROR", message, details)


class DecodeError(ProviderError):
    """Malformed codec input."""

    def __init__(self, message: str = "Malformed encoded parameter", details: Optional[Dict[str, Any]] = None):
        super().__init__("DECODE_ERROR", message, details)


class JsonError(ProviderError):
    """Malformed structured payload after decoding."""

    def __init__(self, message: str = "Malformed JSON payload", details: Optional[Dict[str, Any]] = None):
        super().__init__("JSON_ERROR", message, details)


class UtfError(ProviderError):
    """Decoded bytes were not valid UTF-8."""

    def __init__(self, message: str = "Invalid UTF-8 payload", details: Optional[Dict[str, Any]] = None):
        super().__init__("UTF_ERROR", message, details)


class JWTError(ProviderError):
    """Signing or encryption of a result failed."""

    def __init__(self, message: str = "Token signing failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("JWT_ERROR", message, details)
