"""
OpenRouter adapter.

OpenRouter is OpenAI-compatible but asks callers to identify themselves
with ``HTTP-Referer`` / ``X-Title`` headers; the gateway also opts into
its model fallback routing.
"""

from typing import Dict, Any

from .openai_compatible import OpenAICompatibleAdapter
from ..models.request import ChatRequest

DEFAULT_REFERER = "https://your-site.com"
DEFAULT_TITLE = "NSTA"


class OpenRouterAdapter(OpenAICompatibleAdapter):
    """OpenRouter chat completions."""

    @property
    def adapter_type(self) -> str:
        return "openrouter"

    def build_headers(self, credential: str) -> Dict[str, str]:
        headers = super().build_headers(credential)
        headers.setdefault("HTTP-Referer", DEFAULT_REFERER)
        headers.setdefault("X-Title", DEFAULT_TITLE)
        return headers

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        payload = super().build_payload(request)
        payload["route"] = "fallback"
        return payload
