"""
Credential resolution.

A credential comes from the request body first, then from the server-side
environment variable named in the provider settings. Pooled variables hold
a comma-separated list of interchangeable keys; one is picked per request.
Nothing is cached: the environment is consulted on every call.
"""

import os
import random
import logging
from typing import Callable, Mapping, Optional, Sequence, List

from ..models.request import ChatRequest
from .config import ProviderSettings
from .errors import CredentialMissingError

logger = logging.getLogger(__name__)

KeySelector = Callable[[Sequence[str]], str]


def split_pool(raw: Optional[str]) -> List[str]:
    """Split a comma-separated key list, dropping blanks."""
    if not raw:
        return []
    return [k.strip() for k in raw.split(",") if k.strip()]


class CredentialResolver:
    """
    Resolves the secret used for one upstream call.

    Args:
        environ: Mapping to read server credentials from (defaults to os.environ)
        selector: Picks one key out of a pool (defaults to random.choice)
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        selector: Optional[KeySelector] = None,
    ):
        self._environ = environ if environ is not None else os.environ
        self._selector = selector or random.choice

    def server_credential(self, settings: ProviderSettings) -> Optional[str]:
        """Credential from the server environment, or None."""
        raw = self._environ.get(settings.credential_env) if settings.credential_env else None
        if settings.credential_pool:
            keys = split_pool(raw)
            if not keys:
                return None
            return self._selector(keys)
        return raw.strip() if raw and raw.strip() else None

    def has_server_credential(self, settings: ProviderSettings) -> bool:
        raw = self._environ.get(settings.credential_env) if settings.credential_env else None
        if settings.credential_pool:
            return bool(split_pool(raw))
        return bool(raw and raw.strip())

    def resolve(self, request: ChatRequest, settings: ProviderSettings) -> str:
        """
        Resolve the credential for a request.

        Raises:
            CredentialMissingError: If neither the request nor the server
                environment provides one
        """
        if request.api_key is not None:
            key = request.api_key.get_secret_value()
            if key:
                return key

        key = self.server_credential(settings)
        if key:
            return key

        logger.warning(f"No credential available for provider {settings.name}")
        raise CredentialMissingError(settings.name)
