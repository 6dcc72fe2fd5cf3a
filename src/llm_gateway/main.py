"""
LLM Gateway Service

A FastAPI service that forwards OpenAI-style chat completion requests to
one of several upstream LLM providers and normalizes their responses.

Features:
- Provider routing (Groq, OpenAI, OpenRouter, Gemini)
- Request-body or server-side credentials, with a key pool for Groq
- Payload translation for Gemini's generateContent API
- Server-sent event passthrough for streaming requests
- Structured JSON errors for every failure
"""

import os
import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, StreamingResponse
from opentelemetry import trace
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor
from opentelemetry.sdk.resources import Resource
import httpx

from .core.config import GatewayConfig, load_config
from .core.errors import GatewayError
from .models.response import ErrorBody
from .handler import GatewayHandler

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SERVICE_NAME = "llm-gateway"


def _setup_tracing() -> None:
    """Export spans over OTLP when a collector endpoint is configured."""
    otel_endpoint = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT")
    if not otel_endpoint:
        return

    resource = Resource.create({"service.name": SERVICE_NAME})
    provider = TracerProvider(resource=resource)
    processor = BatchSpanProcessor(OTLPSpanExporter(endpoint=otel_endpoint))
    provider.add_span_processor(processor)
    trace.set_tracer_provider(provider)


def create_app(
    handler: Optional[GatewayHandler] = None,
    config: Optional[GatewayConfig] = None,
) -> FastAPI:
    """
    Build the gateway application.

    Args:
        handler: Pre-built handler (tests inject one with a mock transport).
            When None, one is created at startup with a shared HTTP client.
        config: Gateway configuration; loaded from file/env when None
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        http_client: Optional[httpx.AsyncClient] = None

        if app.state.handler is None:
            _setup_tracing()
            gateway_config = config or load_config()
            http_client = httpx.AsyncClient(timeout=gateway_config.timeout)
            app.state.handler = GatewayHandler.from_config(gateway_config, http_client)

        logger.info(
            f"LLM gateway started with providers: "
            f"{', '.join(p['name'] for p in app.state.handler.registry.list_providers())}"
        )
        yield

        # Cleanup
        if http_client is not None:
            await http_client.aclose()
        logger.info("LLM gateway stopped")

    app = FastAPI(
        title="LLM Gateway",
        description="Multi-provider chat completion gateway",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.handler = handler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError):
        body = ErrorBody(**exc.to_dict())
        return JSONResponse(status_code=exc.status_code, content=body.model_dump(exclude_none=True))

    @app.get("/health")
    async def health(request: Request):
        gateway: GatewayHandler = request.app.state.handler
        return {
            "status": "healthy",
            "providers": [p["name"] for p in gateway.registry.list_providers()],
        }

    @app.get("/providers")
    async def list_providers(request: Request):
        """List providers and whether a server-side credential is configured."""
        gateway: GatewayHandler = request.app.state.handler
        providers = []
        for info in gateway.registry.list_providers():
            adapter = gateway.registry.get(info["name"])
            providers.append({
                **info,
                "server_credential": gateway.credentials.has_server_credential(adapter.settings),
            })
        return {"providers": providers}

    @app.api_route(
        "/ai",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        responses={code: {"model": ErrorBody} for code in (400, 405, 500)},
    )
    async def ai(request: Request):
        gateway: GatewayHandler = request.app.state.handler
        body = await request.body() if request.method == "POST" else b""
        result = await gateway.handle(request.method, body)

        if result.is_stream:
            return StreamingResponse(
                result.stream,
                status_code=result.status_code,
                headers=result.headers,
            )
        return JSONResponse(status_code=result.status_code, content=result.body)

    FastAPIInstrumentor.instrument_app(app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(app, host="0.0.0.0", port=port)
