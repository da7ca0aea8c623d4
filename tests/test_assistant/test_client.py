"""
Tests for fleet_optimizer/assistant/client.py.

All HTTP goes through ``httpx.MockTransport``; no network access.
"""

from __future__ import annotations

import json
import logging

import httpx
import pytest

from fleet_optimizer.assistant.client import (
    ERROR_REPLY,
    NO_RESPONSE_REPLY,
    AssistantClient,
)
from fleet_optimizer.assistant.context import SYSTEM_PROMPT, FleetContext
from fleet_optimizer.config import ChatConfig


@pytest.fixture
def chat_config() -> ChatConfig:
    return ChatConfig(base_url="https://chat.example.test/v1/", model="test-model")


def _client(chat_config, handler, api_key="secret-token"):
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return AssistantClient(chat_config, api_key=api_key, http_client=http)


def _completion(content):
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


class TestAsk:
    def test_success_sends_expected_request(self, chat_config):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return _completion("Right-size orders-prod-01 first.")

        reply = _client(chat_config, handler).ask(
            "What first?", FleetContext(profile="gaming")
        )

        assert reply == "Right-size orders-prod-01 first."
        request = seen[0]
        assert str(request.url) == "https://chat.example.test/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer secret-token"
        body = json.loads(request.content)
        assert body["model"] == "test-model"
        assert body["max_tokens"] == 500
        assert body["temperature"] == 0.7
        assert [m["role"] for m in body["messages"]] == ["system", "user"]
        assert body["messages"][1]["content"] == "What first?"
        assert "- Profile: gaming" in body["messages"][0]["content"]

    def test_http_error_returns_error_reply(self, chat_config):
        client = _client(chat_config, lambda r: httpx.Response(500, text="boom"))
        assert client.ask("hi") == ERROR_REPLY

    def test_transport_error_returns_error_reply(self, chat_config):
        def handler(request):
            raise httpx.ConnectError("unreachable", request=request)

        assert _client(chat_config, handler).ask("hi") == ERROR_REPLY

    def test_invalid_json_returns_error_reply(self, chat_config):
        client = _client(chat_config, lambda r: httpx.Response(200, text="not json"))
        assert client.ask("hi") == ERROR_REPLY

    def test_empty_choices_returns_no_response(self, chat_config):
        client = _client(chat_config, lambda r: httpx.Response(200, json={"choices": []}))
        assert client.ask("hi") == NO_RESPONSE_REPLY

    def test_empty_content_returns_no_response(self, chat_config):
        assert _client(chat_config, lambda r: _completion("")).ask("hi") == NO_RESPONSE_REPLY

    def test_missing_token_skips_request(self, chat_config, monkeypatch):
        monkeypatch.delenv(chat_config.api_key_env, raising=False)

        def handler(request):
            raise AssertionError("no request expected without a token")

        http = httpx.Client(transport=httpx.MockTransport(handler))
        client = AssistantClient(chat_config, http_client=http)
        assert client.ask("hi") == ERROR_REPLY

    def test_missing_token_warning_carries_profile(self, chat_config, monkeypatch, caplog):
        monkeypatch.delenv(chat_config.api_key_env, raising=False)
        client = AssistantClient(chat_config)
        with caplog.at_level(logging.WARNING, logger="fleet_optimizer.assistant.client"):
            client.ask("hi", FleetContext(profile="financial"))
        assert caplog.records[-1].profile == "financial"

    def test_token_read_from_environment(self, chat_config, monkeypatch):
        monkeypatch.setenv(chat_config.api_key_env, "env-token")
        assert AssistantClient(chat_config).api_key == "env-token"


class TestBuildMessages:
    def test_without_context_is_bare_prompt(self, chat_config):
        client = AssistantClient(chat_config, api_key="x")
        messages = client.build_messages("hello")
        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[1] == {"role": "user", "content": "hello"}
