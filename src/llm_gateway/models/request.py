"""
Canonical request models for the LLM gateway.
"""

from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, Field, SecretStr, field_validator


class Message(BaseModel):
    """
    Provider-agnostic chat message.

    Extra keys (e.g. ``name``) are kept so OpenAI-compatible providers
    receive the message exactly as the caller sent it.
    """
    role: Literal["system", "user", "assistant", "function"]
    content: Optional[str] = None

    class Config:
        extra = "allow"

    @property
    def text(self) -> str:
        return self.content or ""


class ChatRequest(BaseModel):
    """
    Canonical chat completion request.

    OpenAI-style shape plus the gateway routing fields ``provider`` and
    ``apiKey``.
    """
    messages: List[Message] = Field(..., min_length=1, description="Ordered conversation messages")
    model: Optional[str] = None
    provider: Optional[str] = None
    api_key: Optional[SecretStr] = Field(default=None, alias="apiKey")

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    stream: Optional[bool] = None

    # Opaque, forwarded as-is
    tools: Optional[List[Dict[str, Any]]] = None
    tool_choice: Optional[Any] = None

    class Config:
        populate_by_name = True

    @field_validator("provider")
    @classmethod
    def _upper_provider(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip().upper()
        return value or None

    @property
    def wants_stream(self) -> bool:
        return bool(self.stream)

    def message_dicts(self) -> List[Dict[str, Any]]:
        """Messages as plain dicts with only the fields the caller set."""
        return [m.model_dump(exclude_unset=True) for m in self.messages]
