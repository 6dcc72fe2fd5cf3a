"""
Tests for provider adapters.

Covers the request translation each adapter performs: endpoint, headers,
payload and response normalization.
"""
import pytest

from llm_gateway.adapters import (
    ADAPTER_TYPES,
    GroqAdapter,
    OpenAIAdapter,
    OpenRouterAdapter,
    GeminiAdapter,
)
from llm_gateway.core.config import default_providers
from llm_gateway.core.interface import ProviderCapability
from llm_gateway.models.request import ChatRequest, Message


def _settings(name):
    return next(p for p in default_providers() if p.name == name)


def _request(**fields):
    fields.setdefault("messages", [Message(role="user", content="Hello")])
    return ChatRequest(**fields)


class TestOpenAICompatibleAdapters:
    """Test Groq/OpenAI payload construction."""

    def test_defaults_applied(self):
        """Test unset fields get the gateway defaults."""
        adapter = GroqAdapter(_settings("GROQ"))
        payload = adapter.build_payload(_request())
        assert payload == {
            "model": "llama3-8b-8192",
            "messages": [{"role": "user", "content": "Hello"}],
            "temperature": 0.7,
            "max_tokens": 4096,
            "stream": False,
        }

    def test_explicit_values_kept(self):
        """Test caller values override defaults, including zero temperature."""
        adapter = OpenAIAdapter(_settings("OPENAI"))
        payload = adapter.build_payload(_request(
            model="gpt-4o-mini", temperature=0, max_tokens=10, stream=True,
        ))
        assert payload["model"] == "gpt-4o-mini"
        assert payload["temperature"] == 0
        assert payload["max_tokens"] == 10
        assert payload["stream"] is True

    def test_tools_forwarded_when_present(self):
        """Test tools and tool_choice pass through untouched."""
        tools = [{"type": "function", "function": {"name": "lookup"}}]
        adapter = GroqAdapter(_settings("GROQ"))
        payload = adapter.build_payload(_request(tools=tools, tool_choice="auto"))
        assert payload["tools"] == tools
        assert payload["tool_choice"] == "auto"
        assert "tools" not in adapter.build_payload(_request())

    def test_message_extras_preserved(self):
        """Test extra message keys like name are forwarded."""
        adapter = GroqAdapter(_settings("GROQ"))
        payload = adapter.build_payload(_request(messages=[
            Message(role="function", content="42", name="lookup"),
        ]))
        assert payload["messages"] == [{"role": "function", "content": "42", "name": "lookup"}]

    def test_explicit_null_content_preserved(self):
        """Test keys sent as null are forwarded while unsent keys stay absent."""
        adapter = GroqAdapter(_settings("GROQ"))
        request = ChatRequest.model_validate({"messages": [
            {"role": "assistant", "content": None, "function_call": {"name": "lookup"}},
            {"role": "user", "content": "Hi"},
        ]})
        assert adapter.build_payload(request)["messages"] == [
            {"role": "assistant", "content": None, "function_call": {"name": "lookup"}},
            {"role": "user", "content": "Hi"},
        ]
        no_content = ChatRequest.model_validate({"messages": [{"role": "user"}]})
        assert adapter.build_payload(no_content)["messages"] == [{"role": "user"}]

    def test_bearer_header(self):
        """Test credential is sent as a bearer token."""
        headers = OpenAIAdapter(_settings("OPENAI")).build_headers("sk-1")
        assert headers["Authorization"] == "Bearer sk-1"
        assert headers["Content-Type"] == "application/json"

    def test_response_unchanged(self):
        """Test OpenAI responses are not reshaped."""
        data = {"choices": [{"message": {"role": "assistant", "content": "hi"}}]}
        assert GroqAdapter(_settings("GROQ")).normalize_response(data) == data

    def test_supports_streaming(self):
        """Test OpenAI-compatible adapters can stream."""
        assert GroqAdapter(_settings("GROQ")).supports(ProviderCapability.STREAMING)


class TestOpenRouterAdapter:
    """Test OpenRouter additions."""

    def test_route_hint(self):
        """Test the fallback routing hint is set."""
        payload = OpenRouterAdapter(_settings("OPENROUTER")).build_payload(_request())
        assert payload["route"] == "fallback"
        assert payload["model"] == "llama3-8b-8192"

    def test_identification_headers(self):
        """Test referer and title headers accompany the bearer token."""
        headers = OpenRouterAdapter(_settings("OPENROUTER")).build_headers("or-key")
        assert headers["Authorization"] == "Bearer or-key"
        assert headers["HTTP-Referer"]
        assert headers["X-Title"]


class TestGeminiAdapter:
    """Test Gemini translation."""

    def test_message_translation(self):
        """Test system extraction and role mapping."""
        adapter = GeminiAdapter(_settings("GEMINI"))
        payload = adapter.build_payload(_request(messages=[
            Message(role="system", content="S"),
            Message(role="user", content="U"),
            Message(role="assistant", content="A"),
        ]))
        assert payload["systemInstruction"] == {"parts": [{"text": "S"}]}
        assert payload["contents"] == [
            {"role": "user", "parts": [{"text": "U"}]},
            {"role": "model", "parts": [{"text": "A"}]},
        ]

    def test_function_messages_dropped(self):
        """Test function messages are excluded from contents."""
        adapter = GeminiAdapter(_settings("GEMINI"))
        payload = adapter.build_payload(_request(messages=[
            Message(role="user", content="U"),
            Message(role="function", content="F"),
        ]))
        assert payload["contents"] == [{"role": "user", "parts": [{"text": "U"}]}]
        assert "systemInstruction" not in payload

    def test_generation_config(self):
        """Test sampling parameters map onto generationConfig."""
        adapter = GeminiAdapter(_settings("GEMINI"))
        assert adapter.build_payload(_request())["generationConfig"] == {
            "temperature": 0.7,
            "maxOutputTokens": 4096,
        }
        config = adapter.build_payload(_request(temperature=0.1, max_tokens=64))["generationConfig"]
        assert config == {"temperature": 0.1, "maxOutputTokens": 64}

    def test_endpoint_carries_model_and_key(self):
        """Test the key is a query parameter and the model is in the path."""
        adapter = GeminiAdapter(_settings("GEMINI"))
        assert adapter.build_endpoint(_request(), "gk") == (
            "https://generativelanguage.googleapis.com/v1beta/models/"
            "gemini-1.5-flash:generateContent?key=gk"
        )
        assert ":generateContent" in adapter.build_endpoint(_request(model="gemini-1.5-pro"), "gk")
        assert "/models/gemini-1.5-pro:" in adapter.build_endpoint(_request(model="gemini-1.5-pro"), "gk")

    def test_no_authorization_header(self):
        """Test Gemini does not send the key as a header."""
        headers = GeminiAdapter(_settings("GEMINI")).build_headers("gk")
        assert "Authorization" not in headers
        assert "gk" not in headers.values()

    def test_normalization(self):
        """Test candidate text is wrapped into the canonical shape."""
        adapter = GeminiAdapter(_settings("GEMINI"))
        data = {"candidates": [{"content": {"parts": [{"text": "hello"}]}}]}
        assert adapter.normalize_response(data) == {
            "choices": [{"message": {"role": "assistant", "content": "hello"}}]
        }

    @pytest.mark.parametrize("data", [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        {"candidates": [{"content": "x"}]},
        {"candidates": [{"content": {"parts": {"a": 1}}}]},
        {"candidates": {"0": {}}},
        {"candidates": ["text"]},
        {"candidates": [{"content": {"parts": ["text"]}}]},
        {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
        [],
        "hello",
        None,
    ])
    def test_normalization_missing_segments(self, data):
        """Test absent segments yield empty content."""
        normalized = GeminiAdapter(_settings("GEMINI")).normalize_response(data)
        assert normalized["choices"][0]["message"]["content"] == ""

    def test_cannot_stream(self):
        """Test Gemini does not advertise streaming."""
        assert not GeminiAdapter(_settings("GEMINI")).supports(ProviderCapability.STREAMING)


class TestAdapterTypes:
    """Test adapter type table."""

    def test_every_default_provider_has_adapter(self):
        """Test each built-in provider maps to an adapter class."""
        for settings in default_providers():
            assert settings.type in ADAPTER_TYPES

    def test_describe_has_no_secret(self):
        """Test adapter descriptions only expose public fields."""
        info = GroqAdapter(_settings("GROQ")).describe()
        assert info["name"] == "GROQ"
        assert "streaming" in info["capabilities"]
        assert set(info) == {"name", "type", "default_model", "capabilities"}
