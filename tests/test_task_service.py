import asyncio

import pytest

from task_helper.config.settings import Settings
from task_helper.domain.models import InvocationResult, UploadedFile
from task_helper.infrastructure.llm.exceptions import ModelError, ValidationError
from task_helper.services.task_service import TaskService


class FakeProvider:
    def __init__(self, behaviors=None):
        self.requests = []
        self.behaviors = list(behaviors or [])

    def send(self, request):
        self.requests.append(request)
        status, payload = self.behaviors.pop(0)
        return InvocationResult(ok=200 <= status < 300, status=status, payload=payload, model=request.model)


@pytest.fixture
def settings():
    return Settings(primary_model="model-X", fallback_model="model-4.1")


def test_end_to_end_with_fallback(settings):
    provider = FakeProvider([(404, {"error": {"message": "not found"}}), (200, {"output_text": "done"})])
    svc = TaskService(provider, settings)
    files = [UploadedFile(name="a.csv", media_type="text/csv", size=7, content="a,b\n1,2")]

    res = svc.run_sync("List files", files)

    rendered = res.prompt.rendered
    assert "List files" in rendered
    assert "a.csv" in rendered
    assert "a,b\n1,2" in rendered

    assert [r.model for r in provider.requests] == ["model-X", "model-4.1"]
    assert provider.requests[0].input == provider.requests[1].input == rendered
    assert res.answer.text == "done"
    assert res.model == "model-4.1"


def test_blank_task_and_no_files_is_rejected_before_network(settings):
    provider = FakeProvider()
    svc = TaskService(provider, settings)

    with pytest.raises(ValidationError):
        svc.run_sync("   ", [])

    assert provider.requests == []


def test_files_without_task_are_accepted(settings):
    provider = FakeProvider([(200, {"choices": [{"message": {"content": "seen"}}]})])
    svc = TaskService(provider, settings)

    res = svc.run_sync("", [UploadedFile(name="x.png", media_type="image/png", content=b"\x89PNG")])

    assert res.answer.text == "seen"
    assert "x.png" in res.prompt.rendered


def test_task_without_files_is_accepted(settings):
    provider = FakeProvider([(200, {"output": [{"content": [{"text": "42"}]}]})])

    res = TaskService(provider, settings).run_sync("What is 6*7?", [])

    assert res.answer.text == "42"


def test_final_failure_carries_last_attempt(settings):
    provider = FakeProvider([(404, {"error": "primary"}), (429, {"error": "fallback"})])

    with pytest.raises(ModelError) as exc:
        TaskService(provider, settings).run_sync("Task", [])

    assert exc.value.status == 429
    assert exc.value.payload == {"error": "fallback"}


def test_null_success_payload_normalizes_to_empty(settings):
    provider = FakeProvider([(200, None)])

    res = TaskService(provider, settings).run_sync("Task", [])

    assert res.answer.text == ""


def test_file_order_survives_out_of_order_reads(settings):
    async def slow(up, delay):
        await asyncio.sleep(delay)
        return up

    provider = FakeProvider([(200, {"output_text": "ok"})])
    svc = TaskService(provider, settings)

    async def scenario():
        sources = [
            slow(UploadedFile(name="one.txt", media_type="text/plain", content="1"), 0.02),
            slow(UploadedFile(name="two.txt", media_type="text/plain", content="2"), 0.0),
        ]
        return await svc.run("Order", sources)

    res = asyncio.run(scenario())

    assert [p.name for p in res.prompt.previews] == ["one.txt", "two.txt"]
    assert res.prompt.rendered.index("one.txt") < res.prompt.rendered.index("two.txt")
