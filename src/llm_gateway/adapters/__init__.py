"""
Provider adapters for the supported upstream LLM APIs.
"""

from .openai_compatible import OpenAICompatibleAdapter, GroqAdapter, OpenAIAdapter
from .openrouter_adapter import OpenRouterAdapter
from .gemini_adapter import GeminiAdapter

# Adapter type identifier -> class, as referenced by ProviderSettings.type
ADAPTER_TYPES = {
    "groq": GroqAdapter,
    "openai": OpenAIAdapter,
    "openai_compatible": OpenAICompatibleAdapter,
    "openrouter": OpenRouterAdapter,
    "gemini": GeminiAdapter,
}

__all__ = [
    "ADAPTER_TYPES",
    "OpenAICompatibleAdapter",
    "GroqAdapter",
    "OpenAIAdapter",
    "OpenRouterAdapter",
    "GeminiAdapter",
]
