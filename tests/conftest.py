"""
Shared fixtures for gateway tests.

Upstream providers are simulated with httpx.MockTransport; every outbound
request is recorded so tests can inspect URL, headers and payload.
"""
import json
from typing import Callable, List, Optional, Mapping

import httpx
import pytest

from llm_gateway.core.config import GatewayConfig, parse_config
from llm_gateway.core.credentials import CredentialResolver
from llm_gateway.handler import GatewayHandler


class UpstreamRecorder:
    """Mock upstream that records requests and answers with a responder."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]):
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_payload(self) -> dict:
        return json.loads(self.last.content)


def openai_reply(content: str = "hi") -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def make_gateway():
    """Factory returning (handler, recorder) wired to a mock upstream."""

    def _make(
        responder: Optional[Callable[[httpx.Request], httpx.Response]] = None,
        environ: Optional[Mapping[str, str]] = None,
        selector=None,
        config: Optional[GatewayConfig] = None,
    ):
        recorder = UpstreamRecorder(responder or (lambda r: httpx.Response(200, json=openai_reply())))
        client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        handler = GatewayHandler.from_config(
            config or parse_config({}),
            client,
            CredentialResolver(environ=environ if environ is not None else {}, selector=selector),
        )
        return handler, recorder

    return _make


def request_body(**fields) -> bytes:
    """Encode a chat request body with a default single user message."""
    data = {"messages": [{"role": "user", "content": "Hello"}]}
    data.update(fields)
    return json.dumps(data).encode()
