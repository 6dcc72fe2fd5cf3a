"""
Google Gemini adapter.

Talks to the Generative Language REST API (``generateContent``). The
request and response shapes differ entirely from the OpenAI format, and
the API key travels as a query parameter rather than a header.
"""

from typing import Set, Dict, Any, List, Optional
from urllib.parse import quote

from ..core.interface import ProviderAdapter, ProviderCapability, sampling_defaults
from ..models.request import ChatRequest
from ..models.response import ChatResponse


class GeminiAdapter(ProviderAdapter):
    """
    Gemini generateContent adapter.

    Supports:
    - System prompt via ``systemInstruction``
    - Temperature / max output tokens via ``generationConfig``

    Streaming is not supported: generateContent returns a single JSON body.
    """

    @property
    def adapter_type(self) -> str:
        return "gemini"

    @property
    def capabilities(self) -> Set[ProviderCapability]:
        return {
            ProviderCapability.CHAT_COMPLETION,
            ProviderCapability.SYSTEM_INSTRUCTION,
        }

    def build_endpoint(self, request: ChatRequest, credential: str) -> str:
        base = self._settings.endpoint.rstrip("/")
        model = self.resolve_model(request)
        return f"{base}/models/{model}:generateContent?key={quote(credential, safe='')}"

    def build_headers(self, credential: str) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self._settings.headers)
        return headers

    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        """Build payload for Gemini models."""
        contents: List[Dict[str, Any]] = []
        system_instruction: Optional[Dict[str, Any]] = None

        for msg in request.messages:
            if msg.role == "system":
                if system_instruction is None:
                    system_instruction = {"parts": [{"text": msg.text}]}
                continue
            if msg.role == "function":
                continue

            role = "user" if msg.role == "user" else "model"
            contents.append({
                "role": role,
                "parts": [{"text": msg.text}],
            })

        sampling = sampling_defaults(request)
        payload: Dict[str, Any] = {
            "contents": contents,
            "generationConfig": {
                "temperature": sampling["temperature"],
                "maxOutputTokens": sampling["max_tokens"],
            },
        }

        if system_instruction:
            payload["systemInstruction"] = system_instruction

        return payload

    def normalize_response(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return ChatResponse.from_gemini(data).model_dump()
