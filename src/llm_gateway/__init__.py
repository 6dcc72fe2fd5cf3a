"""
LLM Gateway

A stateless translator between one OpenAI-style chat completion contract
and several upstream providers:
- Provider selection with a default fallback
- Credential resolution with server-side key pools
- Per-provider payload, header and endpoint adapters
- Streaming passthrough and response normalization
"""

from .core.interface import ProviderAdapter, ProviderCapability
from .core.registry import ProviderRegistry, build_registry
from .core.config import GatewayConfig, ProviderSettings, load_config
from .core.credentials import CredentialResolver
from .handler import GatewayHandler, GatewayResult, OutboundRequest
from .models.request import ChatRequest, Message
from .models.response import ChatResponse, Choice

__all__ = [
    "ProviderAdapter",
    "ProviderCapability",
    "ProviderRegistry",
    "build_registry",
    "GatewayConfig",
    "ProviderSettings",
    "load_config",
    "CredentialResolver",
    "GatewayHandler",
    "GatewayResult",
    "OutboundRequest",
    "ChatRequest",
    "Message",
    "ChatResponse",
    "Choice",
]
__version__ = "1.0.0"
