"""
LLM gateway data models.
"""

from .request import ChatRequest, Message
from .response import ChatResponse, Choice, ResponseMessage, ErrorBody

__all__ = [
    "ChatRequest",
    "Message",
    "ChatResponse",
    "Choice",
    "ResponseMessage",
    "ErrorBody",
]
