import json

import httpx
import pytest
from llm.providers.anthropic_provider import AnthropicProvider
from llm.providers.mock_provider import MockProvider
from llm.providers.ollama_provider import OllamaProvider
from llm.providers.openai_provider import OpenAIProvider
from llm.prompts import TASK_ANALYSIS_TEMPLATE
from scheduling.interpreter import parse_suggestions
from reporting.narrative import parse_report_narrative
from spark_ai.errors import RemoteCallError

def _transport(handler, seen):
    def _handle(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        seen["body"] = json.loads(request.content)
        return handler(request)
    return httpx.MockTransport(_handle)

def test_anthropic_provider_sends_messages_request():
    seen = {}
    transport = _transport(
        lambda r: httpx.Response(200, json={"content": [{"type": "text", "text": "[]"}]}),
        seen,
    )
    provider = AnthropicProvider(api_key="sk-test", model="claude-test", transport=transport)

    assert provider.generate(prompt="hello", max_tokens=1024) == "[]"
    request = seen["request"]
    assert str(request.url) == "https://api.anthropic.com/v1/messages"
    assert request.headers["x-api-key"] == "sk-test"
    assert request.headers["anthropic-version"] == "2023-06-01"
    assert seen["body"] == {
        "model": "claude-test",
        "max_tokens": 1024,
        "messages": [{"role": "user", "content": "hello"}],
    }

def test_anthropic_provider_without_key_fails_before_any_request():
    def _fail(request):
        raise AssertionError("no request expected")
    provider = AnthropicProvider(api_key="", model="m", transport=httpx.MockTransport(_fail))
    with pytest.raises(RemoteCallError):
        provider.generate(prompt="hello", max_tokens=10)

def test_anthropic_provider_http_error_propagates():
    transport = httpx.MockTransport(lambda r: httpx.Response(529, json={"error": "overloaded"}))
    provider = AnthropicProvider(api_key="k", model="m", transport=transport)
    with pytest.raises(httpx.HTTPStatusError):
        provider.generate(prompt="hello", max_tokens=10)

def test_anthropic_provider_rejects_response_without_text():
    transport = httpx.MockTransport(lambda r: httpx.Response(200, json={"content": []}))
    provider = AnthropicProvider(api_key="k", model="m", transport=transport)
    with pytest.raises(RemoteCallError):
        provider.generate(prompt="hello", max_tokens=10)

def test_openai_provider_reads_first_choice():
    seen = {}
    transport = _transport(
        lambda r: httpx.Response(200, json={"choices": [{"message": {"content": "{}"}}]}),
        seen,
    )
    provider = OpenAIProvider(api_key="sk", model="gpt-test", transport=transport)
    assert provider.generate(prompt="hi", max_tokens=99) == "{}"
    assert seen["request"].headers["authorization"] == "Bearer sk"
    assert seen["body"]["max_tokens"] == 99

def test_openai_provider_requires_key():
    with pytest.raises(RemoteCallError):
        OpenAIProvider(api_key="").generate(prompt="hi", max_tokens=1)

def test_ollama_provider_maps_token_budget():
    seen = {}
    transport = _transport(
        lambda r: httpx.Response(200, json={"message": {"content": "[]"}}),
        seen,
    )
    provider = OllamaProvider(base_url="http://ollama:11434/", transport=transport)
    assert provider.generate(prompt="hi", max_tokens=42) == "[]"
    assert str(seen["request"].url) == "http://ollama:11434/api/chat"
    assert seen["body"]["options"]["num_predict"] == 42
    assert seen["body"]["stream"] is False

def test_mock_provider_answers_both_prompt_kinds():
    provider = MockProvider()
    slots = parse_suggestions(provider.generate(prompt=TASK_ANALYSIS_TEMPLATE, max_tokens=10))
    assert len(slots) == 3
    narrative = parse_report_narrative(
        provider.generate(prompt="Analyze this monthly task data and provide insights:", max_tokens=10)
    )
    assert narrative.recommendation
    assert provider.generate(prompt="something else", max_tokens=10) == "{}"
