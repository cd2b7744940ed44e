import pytest
import requests

from task_helper.domain.models import InvocationRequest
from task_helper.infrastructure.llm.exceptions import ConfigurationError, TransportError
from task_helper.infrastructure.llm.openai_provider import OpenAIResponsesProvider


class FakeResponse:
    def __init__(self, status_code, body=None, text=""):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


@pytest.fixture
def request_obj():
    return InvocationRequest(
        model="gpt-5",
        input="Prompt text",
        temperature=0.5,
        max_output_tokens=2000,
        extensions={"reasoning": {"effort": "medium"}},
    )


def _patch_post(monkeypatch, response):
    calls = []

    def fake_post(url, headers=None, json=None, timeout=None):
        calls.append({"url": url, "headers": headers, "json": json, "timeout": timeout})
        if isinstance(response, Exception):
            raise response
        return response

    monkeypatch.setattr(
        "task_helper.infrastructure.llm.openai_provider.requests.post", fake_post
    )
    return calls


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(ConfigurationError):
        OpenAIResponsesProvider()


def test_api_key_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    assert OpenAIResponsesProvider().api_key == "sk-env"


def test_send_posts_payload(monkeypatch, request_obj):
    calls = _patch_post(monkeypatch, FakeResponse(200, {"output_text": "ok"}))
    provider = OpenAIResponsesProvider(api_key="sk-test", base_url="https://example.test/", timeout_sec=9)

    result = provider.send(request_obj)

    assert result.ok
    assert result.status == 200
    assert result.payload == {"output_text": "ok"}
    assert result.model == "gpt-5"

    call = calls[0]
    assert call["url"] == "https://example.test/v1/responses"
    assert call["headers"]["Authorization"] == "Bearer sk-test"
    assert call["timeout"] == 9
    assert call["json"] == {
        "model": "gpt-5",
        "input": "Prompt text",
        "temperature": 0.5,
        "max_output_tokens": 2000,
        "reasoning": {"effort": "medium"},
    }


def test_error_payload_is_forwarded_unmodified(monkeypatch, request_obj):
    body = {"error": {"message": "model not found", "code": "model_not_found"}}
    _patch_post(monkeypatch, FakeResponse(404, body))

    result = OpenAIResponsesProvider(api_key="sk-test").send(request_obj)

    assert not result.ok
    assert result.status == 404
    assert result.payload == body


def test_unparseable_success_body_is_tolerated(monkeypatch, request_obj):
    _patch_post(monkeypatch, FakeResponse(200, ValueError("bad json"), text="<html>"))

    result = OpenAIResponsesProvider(api_key="sk-test").send(request_obj)

    assert result.ok
    assert result.payload is None


def test_unparseable_error_body_keeps_text(monkeypatch, request_obj):
    _patch_post(monkeypatch, FakeResponse(502, ValueError("bad json"), text="Bad Gateway"))

    result = OpenAIResponsesProvider(api_key="sk-test").send(request_obj)

    assert not result.ok
    assert result.payload == {"error": {"message": "Bad Gateway"}}


@pytest.mark.parametrize("exc", [requests.Timeout("slow"), requests.ConnectionError("refused")])
def test_network_failures_raise_transport_error(monkeypatch, request_obj, exc):
    _patch_post(monkeypatch, exc)

    with pytest.raises(TransportError) as err:
        OpenAIResponsesProvider(api_key="sk-test").send(request_obj)

    assert err.value.model == "gpt-5"
