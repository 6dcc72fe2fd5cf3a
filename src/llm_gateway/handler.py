"""
Gateway request handler.

Turns one canonical chat request into exactly one upstream call and one
result: a relayed event stream or a normalized JSON body. Every failure
surfaces as a GatewayError carrying the HTTP status to report.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, AsyncIterator

import httpx
from opentelemetry import trace
from pydantic import ValidationError

from .core.config import GatewayConfig
from .core.credentials import CredentialResolver
from .core.errors import (
    GatewayError,
    MethodNotAllowedError,
    InvalidRequestError,
    StreamingUnsupportedError,
    UpstreamError,
    InternalError,
)
from .core.interface import ProviderAdapter, ProviderCapability
from .core.registry import ProviderRegistry, build_registry
from .models.request import ChatRequest

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

STREAM_HEADERS = {
    "Content-Type": "text/event-stream",
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@dataclass(frozen=True)
class OutboundRequest:
    """A fully built upstream call."""
    provider: str
    url: str
    headers: Dict[str, str]
    payload: Dict[str, Any]


@dataclass
class GatewayResult:
    """Successful outcome of a gateway call."""
    status_code: int = 200
    body: Optional[Dict[str, Any]] = None
    stream: Optional[AsyncIterator[bytes]] = None
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def is_stream(self) -> bool:
        return self.stream is not None


def parse_request(body: bytes) -> ChatRequest:
    """
    Parse and validate a raw request body.

    Raises:
        InvalidRequestError: If the body is not JSON or not a chat request
    """
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise InvalidRequestError("Invalid JSON body", detail=str(e))

    if not isinstance(data, dict):
        raise InvalidRequestError("Invalid request body", detail="Expected a JSON object")

    try:
        return ChatRequest.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidRequestError("Invalid request body", detail=problems)


class GatewayHandler:
    """
    Stateless per-request gateway.

    Args:
        registry: Provider lookup
        credentials: Credential resolver
        client: Shared HTTP client used for upstream calls
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        credentials: CredentialResolver,
        client: httpx.AsyncClient,
    ):
        self._registry = registry
        self._credentials = credentials
        self._client = client

    @classmethod
    def from_config(
        cls,
        config: GatewayConfig,
        client: httpx.AsyncClient,
        credentials: Optional[CredentialResolver] = None,
    ) -> "GatewayHandler":
        return cls(build_registry(config), credentials or CredentialResolver(), client)

    @property
    def registry(self) -> ProviderRegistry:
        return self._registry

    @property
    def credentials(self) -> CredentialResolver:
        return self._credentials

    async def handle(self, method: str, body: bytes) -> GatewayResult:
        """
        Run one gateway request end to end.

        Args:
            method: HTTP method of the incoming request
            body: Raw request body

        Returns:
            Stream or JSON result

        Raises:
            GatewayError: For every failure, with the status to report
        """
        try:
            if method.upper() != "POST":
                raise MethodNotAllowedError(method.upper())

            request = parse_request(body)
            adapter = self._registry.resolve(request.provider)

            if request.wants_stream and not adapter.supports(ProviderCapability.STREAMING):
                raise StreamingUnsupportedError(adapter.name)

            credential = self._credentials.resolve(request, adapter.settings)
            outbound = self.prepare(adapter, request, credential)

            return await self._execute(adapter, request, outbound)

        except GatewayError:
            raise
        except Exception as e:
            logger.exception("Unhandled gateway failure")
            raise InternalError(detail=str(e) or e.__class__.__name__)

    def prepare(
        self,
        adapter: ProviderAdapter,
        request: ChatRequest,
        credential: str,
    ) -> OutboundRequest:
        """Build the provider-specific upstream request."""
        return OutboundRequest(
            provider=adapter.name,
            url=adapter.build_endpoint(request, credential),
            headers=adapter.build_headers(credential),
            payload=adapter.build_payload(request),
        )

    async def _execute(
        self,
        adapter: ProviderAdapter,
        request: ChatRequest,
        outbound: OutboundRequest,
    ) -> GatewayResult:
        model = adapter.resolve_model(request)
        logger.info(f"Forwarding to {adapter.name} (model={model}, stream={request.wants_stream})")

        http_request = self._client.build_request(
            "POST",
            outbound.url,
            headers=outbound.headers,
            json=outbound.payload,
        )

        with tracer.start_as_current_span("upstream_call") as span:
            span.set_attribute("provider", adapter.name)
            span.set_attribute("model", model)
            span.set_attribute("stream", request.wants_stream)

            response = await self._client.send(http_request, stream=True)
            span.set_attribute("upstream.status_code", response.status_code)

        if not response.is_success:
            try:
                await response.aread()
                error_text = response.text
            finally:
                await response.aclose()
            logger.warning(f"{adapter.name} returned {response.status_code}")
            raise UpstreamError(adapter.name, response.status_code, error_text)

        if request.wants_stream:
            return GatewayResult(stream=_relay(response), headers=dict(STREAM_HEADERS))

        try:
            await response.aread()
            data = response.json()
        finally:
            await response.aclose()

        return GatewayResult(body=adapter.normalize_response(data))


async def _relay(response: httpx.Response) -> AsyncIterator[bytes]:
    """Yield upstream bytes as they arrive; always release the connection."""
    try:
        async for chunk in response.aiter_bytes():
            yield chunk
    finally:
        await response.aclose()
