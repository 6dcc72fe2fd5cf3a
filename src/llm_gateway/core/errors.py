"""
Gateway error types.

Every failure in the request flow is one of these; each carries the HTTP
status it is reported with and renders to ``{"error": ..., "detail": ...}``.
"""

from typing import Optional, Dict, Any


class GatewayError(Exception):
    """Base exception for gateway errors."""

    status_code: int = 500

    def __init__(
        self,
        error: str,
        detail: Optional[str] = None,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        self.error = error
        self.detail = detail
        self.provider = provider
        if status_code is not None:
            self.status_code = status_code
        super().__init__(error)

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.detail is not None:
            body["detail"] = self.detail
        return body


class MethodNotAllowedError(GatewayError):
    """Raised for any method other than POST."""

    status_code = 405

    def __init__(self, method: str):
        super().__init__("Method not allowed", detail=f"{method} is not supported, use POST")
        self.method = method


class InvalidRequestError(GatewayError):
    """Raised when the body is not JSON or not a valid chat request."""

    status_code = 400


class UnknownProviderError(GatewayError):
    """Raised for unrecognized provider identifiers when strict routing is on."""

    status_code = 400

    def __init__(self, provider: str):
        super().__init__(f"Unknown provider: {provider}", provider=provider)


class StreamingUnsupportedError(GatewayError):
    """Raised when streaming is requested from a provider that cannot stream."""

    status_code = 400

    def __init__(self, provider: str):
        super().__init__(f"Streaming is not supported for {provider}", provider=provider)


class CredentialMissingError(GatewayError):
    """Raised when no credential can be resolved for the chosen provider."""

    status_code = 500

    def __init__(self, provider: str):
        super().__init__(
            f"Server Configuration Error: No valid keys found for {provider}.",
            detail=f"Set an apiKey in the request or configure a server credential for {provider}",
            provider=provider,
        )


class UpstreamError(GatewayError):
    """Raised when the provider answers with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, body: str):
        super().__init__(
            f"{provider} API Error",
            detail=body,
            provider=provider,
            status_code=status_code,
        )


class InternalError(GatewayError):
    """Raised for any failure not covered by the other error types."""

    status_code = 500

    def __init__(self, detail: Optional[str] = None):
        super().__init__("AI Gateway Internal Error", detail=detail)
