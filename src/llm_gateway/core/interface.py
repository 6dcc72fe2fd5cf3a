"""
Abstract provider adapter definition.

Defines the contract that all provider adapters must implement. Adapters
are stateless translators: everything they produce is a pure function of
the canonical request and the resolved credential.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Set
from enum import Enum

from ..models.request import ChatRequest
from .config import ProviderSettings

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 4096


class ProviderCapability(str, Enum):
    """Capabilities that a provider adapter may support."""
    CHAT_COMPLETION = "chat_completion"
    STREAMING = "streaming"
    TOOL_USE = "tool_use"
    SYSTEM_INSTRUCTION = "system_instruction"


class ProviderAdapter(ABC):
    """
    Abstract base class for provider adapters.

    Each adapter supplies the four translation steps of a gateway call:
    endpoint, headers, payload, and response normalization.
    """

    def __init__(self, settings: ProviderSettings):
        self._settings = settings

    @property
    def name(self) -> str:
        """Upper-case provider identifier (e.g. "GROQ")."""
        return self._settings.name

    @property
    def settings(self) -> ProviderSettings:
        return self._settings

    @property
    @abstractmethod
    def adapter_type(self) -> str:
        """
        Type of adapter (e.g. "openai_compatible", "gemini").

        Returns:
            Adapter type identifier
        """
        pass

    @property
    @abstractmethod
    def capabilities(self) -> Set[ProviderCapability]:
        """
        Set of capabilities this adapter supports.

        Returns:
            Set of ProviderCapability values
        """
        pass

    @abstractmethod
    def build_endpoint(self, request: ChatRequest, credential: str) -> str:
        """
        Build the upstream URL for a request.

        Args:
            request: Canonical chat request
            credential: Resolved provider credential

        Returns:
            Absolute URL to POST to
        """
        pass

    @abstractmethod
    def build_headers(self, credential: str) -> Dict[str, str]:
        """
        Build the upstream HTTP headers.

        Args:
            credential: Resolved provider credential

        Returns:
            Header mapping
        """
        pass

    @abstractmethod
    def build_payload(self, request: ChatRequest) -> Dict[str, Any]:
        """
        Translate the canonical request into the provider's JSON body.

        Args:
            request: Canonical chat request

        Returns:
            Provider-native request body
        """
        pass

    @abstractmethod
    def normalize_response(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Map a provider's JSON response onto the canonical response shape.

        Args:
            data: Parsed upstream response body

        Returns:
            OpenAI-style response body
        """
        pass

    def resolve_model(self, request: ChatRequest) -> str:
        return request.model or self._settings.default_model

    def supports(self, capability: ProviderCapability) -> bool:
        """
        Check if adapter supports a capability.

        Args:
            capability: Capability to check

        Returns:
            True if supported
        """
        return capability in self.capabilities

    def describe(self) -> Dict[str, Any]:
        """Public description of this provider; never includes secrets."""
        return {
            "name": self.name,
            "type": self.adapter_type,
            "default_model": self._settings.default_model,
            "capabilities": sorted(c.value for c in self.capabilities),
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, type={self.adapter_type!r})"


def sampling_defaults(request: ChatRequest) -> Dict[str, Any]:
    """Temperature and token limit with the gateway defaults applied."""
    return {
        "temperature": DEFAULT_TEMPERATURE if request.temperature is None else request.temperature,
        "max_tokens": DEFAULT_MAX_TOKENS if request.max_tokens is None else request.max_tokens,
    }
