"""
Unit tests for the CompletionService.

The hosted API is replaced by an httpx.MockTransport.
"""

import json

import httpx
import pytest

from college_advisor.config.settings import Settings
from college_advisor.infrastructure.ai.completion_service import CompletionService
from college_advisor.infrastructure.ai.prompts import SYSTEM_PROMPT
from college_advisor.infrastructure.exceptions import (
    CompletionServiceError,
    ConfigurationError,
)


CHOICE = {
    "index": 0,
    "message": {"role": "assistant", "content": "1 - Rice University 2 - Emory University 3 - Duke University"},
    "finish_reason": "stop",
}


@pytest.fixture
def test_settings():
    return Settings(openai_api_key="sk-test", openai_base_url="https://llm.example.com/v1")


def make_service(settings, handler) -> CompletionService:
    return CompletionService(settings, transport=httpx.MockTransport(handler))


class TestCompletionService:

    @pytest.mark.asyncio
    async def test_returns_first_choice(self, test_settings):
        captured = {}

        def handler(request: httpx.Request) -> httpx.Response:
            captured["url"] = str(request.url)
            captured["auth"] = request.headers["Authorization"]
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json={"choices": [CHOICE, {**CHOICE, "index": 1}]})

        result = await make_service(test_settings, handler).complete("I'm from Texas.")

        assert result.index == 0
        assert result.role == "assistant"
        assert result.content.startswith("1 - Rice University")
        assert result.finish_reason == "stop"

        assert captured["url"] == "https://llm.example.com/v1/chat/completions"
        assert captured["auth"] == "Bearer sk-test"
        body = captured["body"]
        assert body["model"] == "gpt-3.5-turbo"
        assert body["temperature"] == 0.7
        assert body["max_tokens"] == 256
        assert body["top_p"] == 1.0
        assert body["frequency_penalty"] == 0.0
        assert body["presence_penalty"] == 0.0
        assert body["messages"] == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "I'm from Texas."},
        ]

    @pytest.mark.asyncio
    async def test_makes_exactly_one_call_on_failure(self, test_settings):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(503, json={"error": {"message": "overloaded"}})

        with pytest.raises(CompletionServiceError) as exc_info:
            await make_service(test_settings, handler).complete("hi")

        assert len(calls) == 1
        assert exc_info.value.details["status_code"] == 503

    @pytest.mark.asyncio
    async def test_transport_error(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(CompletionServiceError):
            await make_service(test_settings, handler).complete("hi")

    @pytest.mark.asyncio
    async def test_empty_choices(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": []})

        with pytest.raises(CompletionServiceError):
            await make_service(test_settings, handler).complete("hi")

    @pytest.mark.asyncio
    async def test_non_json_body(self, test_settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>gateway</html>")

        with pytest.raises(CompletionServiceError):
            await make_service(test_settings, handler).complete("hi")

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        service = make_service(Settings(openai_api_key=None), handler)
        with pytest.raises(ConfigurationError) as exc_info:
            await service.complete("hi")
        assert exc_info.value.details["missing_keys"] == ["OPENAI_API_KEY"]
