"""
Normalized response models for the LLM gateway.
"""

from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, Field


class ResponseMessage(BaseModel):
    """Assistant message in a normalized response."""
    role: Literal["assistant"] = "assistant"
    content: str = ""


class Choice(BaseModel):
    """A single completion choice."""
    message: ResponseMessage


class ChatResponse(BaseModel):
    """
    Normalized chat completion response.

    The minimal OpenAI-compatible shape every non-OpenAI provider is mapped
    into: ``{"choices": [{"message": {"role": "assistant", "content": ...}}]}``.
    """
    choices: List[Choice] = Field(default_factory=list)

    @classmethod
    def from_text(cls, content: str) -> "ChatResponse":
        """Wrap plain assistant text into a single-choice response."""
        return cls(choices=[Choice(message=ResponseMessage(content=content))])

    @classmethod
    def from_gemini(cls, data: Any) -> "ChatResponse":
        """
        Create from a Gemini generateContent response.

        Only the first part of the first candidate is used; any missing or
        unexpectedly shaped segment yields empty content.
        """
        return cls.from_text(_first_text(data))

    def get_content(self) -> Optional[str]:
        """Get the content from the first choice."""
        if self.choices:
            return self.choices[0].message.content
        return None


def _first_text(data: Any) -> str:
    """``candidates[0].content.parts[0].text`` or ""."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates")
    if not isinstance(candidates, list) or not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content")
    if not isinstance(content, dict):
        return ""
    parts = content.get("parts")
    if not isinstance(parts, list) or not parts or not isinstance(parts[0], dict):
        return ""
    text = parts[0].get("text")
    return text if isinstance(text, str) else ""


class ErrorBody(BaseModel):
    """Structured error payload returned for every failure."""
    error: str
    detail: Optional[str] = None
