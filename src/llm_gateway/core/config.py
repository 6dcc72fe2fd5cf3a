"""
Configuration loading for the LLM gateway.

Provider settings are static and process-wide: loaded once at startup and
only read afterwards. Credentials themselves are not part of the config;
only the name of the environment variable that holds them is.
"""

import os
import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Dict, List, Any, Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "LLM_GATEWAY_CONFIG"

GROQ = "GROQ"
OPENAI = "OPENAI"
OPENROUTER = "OPENROUTER"
GEMINI = "GEMINI"


@dataclass(frozen=True)
class ProviderSettings:
    """Static settings for a single upstream provider."""
    name: str
    type: str
    endpoint: str
    credential_env: str
    credential_pool: bool = False
    default_model: str = "llama3-8b-8192"
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class GatewayConfig:
    """Complete gateway configuration."""
    default_provider: str = GROQ
    strict_providers: bool = False
    timeout: float = 60.0
    providers: List[ProviderSettings] = field(default_factory=list)

    def get_provider(self, name: str) -> Optional[ProviderSettings]:
        for settings in self.providers:
            if settings.name == name:
                return settings
        return None


def default_providers() -> List[ProviderSettings]:
    """Built-in provider table."""
    return [
        ProviderSettings(
            name=GROQ,
            type="groq",
            endpoint="https://api.groq.com/openai/v1/chat/completions",
            credential_env="GROQ_API_KEYS",
            credential_pool=True,
        ),
        ProviderSettings(
            name=OPENAI,
            type="openai",
            endpoint="https://api.openai.com/v1/chat/completions",
            credential_env="OPENAI_API_KEY",
        ),
        ProviderSettings(
            name=OPENROUTER,
            type="openrouter",
            endpoint="https://openrouter.ai/api/v1/chat/completions",
            credential_env="OPENROUTER_API_KEY",
            headers={
                "HTTP-Referer": os.environ.get("OPENROUTER_REFERER", "https://your-site.com"),
                "X-Title": os.environ.get("OPENROUTER_TITLE", "NSTA"),
            },
        ),
        ProviderSettings(
            name=GEMINI,
            type="gemini",
            endpoint="https://generativelanguage.googleapis.com/v1beta",
            credential_env="GEMINI_API_KEY",
            default_model="gemini-1.5-flash",
        ),
    ]


def load_config(config_path: Optional[str] = None) -> GatewayConfig:
    """
    Load gateway configuration from a YAML file.

    Args:
        config_path: Path to config file. If None, uses $LLM_GATEWAY_CONFIG
            or the default location.

    Returns:
        Loaded configuration
    """
    if config_path is None:
        paths = [
            Path("config/llm-gateway/providers.yaml"),
            Path("/etc/llm-gateway/providers.yaml"),
        ]
        if os.environ.get(CONFIG_ENV_VAR):
            paths.insert(0, Path(os.environ[CONFIG_ENV_VAR]))
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None or not Path(config_path).exists():
        logger.info("No gateway config file found, using defaults")
        return _default_config()

    try:
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return parse_config(data)

    except (OSError, yaml.YAMLError, AttributeError, TypeError, ValueError) as e:
        logger.error(f"Failed to load config from {config_path}: {e}")
        return _default_config()


def parse_config(data: Dict[str, Any]) -> GatewayConfig:
    """
    Parse a configuration dictionary.

    Provider entries are merged over the built-in table by name, so a file
    only has to list the fields it changes.
    """
    providers = {p.name: p for p in default_providers()}

    for entry in data.get("providers", []):
        name = str(entry.get("name", "")).upper()
        if not name:
            raise ValueError("provider entry without a name")

        fields = {k: _expand_env(v) for k, v in entry.items() if k != "name"}
        if "headers" in fields:
            # Headers that expand to nothing are left to the adapter defaults
            headers = {k: _expand_env(v) for k, v in (fields["headers"] or {}).items()}
            fields["headers"] = {k: v for k, v in headers.items() if v not in (None, "")}

        if name in providers:
            providers[name] = replace(providers[name], **fields)
        else:
            providers[name] = ProviderSettings(name=name, **fields)

    return GatewayConfig(
        default_provider=str(data.get("default_provider", GROQ)).upper(),
        strict_providers=bool(data.get("strict_providers", False)),
        timeout=float(data.get("timeout", 60.0)),
        providers=list(providers.values()),
    )


def _expand_env(value: Any) -> Any:
    """Expand a ``${ENV_VAR}`` or ``${ENV_VAR:-default}`` string value."""
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        name, _, default = value[2:-1].partition(":-")
        return os.environ.get(name) or default
    return value


def _default_config() -> GatewayConfig:
    """Return default configuration."""
    return GatewayConfig(providers=default_providers())
