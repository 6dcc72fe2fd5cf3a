"""
Provider registry for looking up adapters by provider identifier.
"""

import logging
from dataclasses import replace
from typing import Dict, List, Optional, Type, Any

from .interface import ProviderAdapter
from .config import GatewayConfig
from .errors import UnknownProviderError

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Registry for provider adapters.

    Holds one adapter instance per configured provider. Unknown identifiers
    take the default provider's endpoint and wire format unless strict
    routing is enabled; they keep their own name and never borrow the
    default provider's server credential.
    """

    def __init__(self, default_provider: str = "GROQ", strict: bool = False):
        """
        Initialize the registry.

        Args:
            default_provider: Provider used when none (or an unknown one) is requested
            strict: Reject unknown provider identifiers instead of falling back
        """
        self._adapter_types: Dict[str, Type[ProviderAdapter]] = {}
        self._providers: Dict[str, ProviderAdapter] = {}
        self._default_provider = default_provider.upper()
        self._strict = strict

    @property
    def default_provider(self) -> str:
        return self._default_provider

    def register_adapter_type(
        self,
        adapter_type: str,
        adapter_class: Type[ProviderAdapter]
    ) -> None:
        """
        Register an adapter class under a type identifier.

        Args:
            adapter_type: Type identifier (e.g. "groq", "gemini")
            adapter_class: Adapter class to register
        """
        self._adapter_types[adapter_type] = adapter_class
        logger.debug(f"Registered adapter type: {adapter_type}")

    def register(self, adapter: ProviderAdapter) -> None:
        """Register a ready adapter instance, replacing any with the same name."""
        self._providers[adapter.name] = adapter
        logger.info(f"Registered provider: {adapter.name} (type: {adapter.adapter_type})")

    def load(self, config: GatewayConfig) -> None:
        """Instantiate an adapter for every provider in the config."""
        for settings in config.providers:
            adapter_class = self._adapter_types.get(settings.type)
            if adapter_class is None:
                raise ValueError(f"No adapter registered for type {settings.type!r} ({settings.name})")
            self.register(adapter_class(settings))

        if self._default_provider not in self._providers:
            raise ValueError(f"Default provider {self._default_provider} is not configured")

    def get(self, name: str) -> Optional[ProviderAdapter]:
        return self._providers.get(name.upper())

    def resolve(self, name: Optional[str]) -> ProviderAdapter:
        """
        Resolve a requested provider identifier to an adapter.

        Args:
            name: Requested identifier, case-insensitive; None means default

        Returns:
            Adapter for the provider

        Raises:
            UnknownProviderError: If strict and the identifier is unknown
        """
        if not name:
            return self._providers[self._default_provider]

        adapter = self.get(name)
        if adapter is not None:
            return adapter

        if self._strict:
            raise UnknownProviderError(name.upper())

        # Default provider's wire path, but the requested name and no server credential.
        logger.warning(f"Unknown provider {name!r}, using the {self._default_provider} endpoint")
        fallback = self._providers[self._default_provider]
        settings = replace(
            fallback.settings,
            name=name.upper(),
            credential_env="",
            credential_pool=False,
        )
        return type(fallback)(settings)

    def list_providers(self) -> List[Dict[str, Any]]:
        """
        List all registered providers.

        Returns:
            List of provider info dicts
        """
        return [
            {**adapter.describe(), "is_default": name == self._default_provider}
            for name, adapter in self._providers.items()
        ]

    def __len__(self) -> int:
        return len(self._providers)

    def __contains__(self, name: str) -> bool:
        return name.upper() in self._providers


def build_registry(config: GatewayConfig) -> ProviderRegistry:
    """Create a registry with the built-in adapter types loaded from config."""
    from ..adapters import ADAPTER_TYPES

    registry = ProviderRegistry(
        default_provider=config.default_provider,
        strict=config.strict_providers,
    )
    for adapter_type, adapter_class in ADAPTER_TYPES.items():
        registry.register_adapter_type(adapter_type, adapter_class)
    registry.load(config)
    return registry
