"""
OpenAI-compatible provider adapters.

Groq and OpenAI both speak the OpenAI chat completions wire format, so the
request body is passed through almost as-is and the response needs no
normalization.
"""

from typing import Set, Dict, Any

from ..core.interface import ProviderAdapter, ProviderCapability, sampling_defaults
from ..models.request import ChatRequest


class OpenAICompatibleAdapter(ProviderAdapter):
    """
    Adapter for providers exposing ``/chat/completions``.

    Authenticates with a bearer token and forwards the canonical request.
    """

    @property
    def adapter_type(self) -> str:
        return "openai_compatible"

    @property
    def capabilities(self) -> Set[ProviderCapability]:
        return {
            ProviderCapability.CHAT_COMPLETION,
            ProviderCapability.STREAMING,
            ProviderCapability.TOOL_USE,
            ProviderCapability.SYSTEM_INSTRUCTION,
        }

    def build_endpoint(self, request: ChatRequest, credential: str) -> str:
        return self._settings.endpoint

    def build_headers(self, credential: str) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {credential}",
        }
        headers.update(self._settings.headers)
        return headers

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        payload = {
            "model": self.resolve_model(request),
            "messages": request.message_dicts(),
            **sampling_defaults(request),
            "stream": request.wants_stream,
        }

        if request.tools is not None:
            payload["tools"] = request.tools
        if request.tool_choice is not None:
            payload["tool_choice"] = request.tool_choice

        return payload

    def normalize_response(self, data: Dict[str, Any]) -> Dict[str, Any]:
        # Already in the canonical shape.
        return data


class GroqAdapter(OpenAICompatibleAdapter):
    """Groq's OpenAI-compatible endpoint."""

    @property
    def adapter_type(self) -> str:
        return "groq"


class OpenAIAdapter(OpenAICompatibleAdapter):
    """Direct OpenAI API."""

    @property
    def adapter_type(self) -> str:
        return "openai"
