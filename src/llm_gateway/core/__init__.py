"""
Core gateway components.
"""

from .interface import ProviderAdapter, ProviderCapability
from .registry import ProviderRegistry, build_registry
from .config import GatewayConfig, ProviderSettings, load_config, parse_config
from .credentials import CredentialResolver
from .errors import (
    GatewayError,
    MethodNotAllowedError,
    InvalidRequestError,
    UnknownProviderError,
    StreamingUnsupportedError,
    CredentialMissingError,
    UpstreamError,
    InternalError,
)

__all__ = [
    "ProviderAdapter",
    "ProviderCapability",
    "ProviderRegistry",
    "build_registry",
    "GatewayConfig",
    "ProviderSettings",
    "load_config",
    "parse_config",
    "CredentialResolver",
    "GatewayError",
    "MethodNotAllowedError",
    "InvalidRequestError",
    "UnknownProviderError",
    "StreamingUnsupportedError",
    "CredentialMissingError",
    "UpstreamError",
    "InternalError",
]
