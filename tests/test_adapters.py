"""Tests for storage and generative client adapters."""

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest
from openai import AsyncOpenAI

from sehat_sense.adapters.json_file_state_storage import JsonFileStateStorage
from sehat_sense.adapters.openai_generative_client import OpenAIGenerativeClient
from sehat_sense.adapters.supabase_state_storage import SupabaseStateStorage
from sehat_sense.domain.errors import ServiceUnavailable
from sehat_sense.domain.profile import UserProfile
from sehat_sense.services.gateway import (
    Attachment,
    ConversationTurn,
    GenerationRequest,
)
from sehat_sense.services.store import StateStore
from tests.conftest import make_meal


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: list[dict[str, object]] = field(default_factory=list)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    on_conflict: str | None = None

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self._action == "upsert":
            assert isinstance(self.last_payload, dict)
            self.rows = [
                row
                for row in self.rows
                if row["namespace"] != self.last_payload["namespace"]
            ]
            self.rows.append(self.last_payload)
            return FakeResponse(data=[self.last_payload])
        namespace = dict(self.last_filters).get("namespace")
        return FakeResponse(
            data=[row for row in self.rows if row["namespace"] == namespace]
        )


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        return self.tables.setdefault(name, FakeTable(name=name))


class _FakeResponses:
    def __init__(self, output_text: str = "ok") -> None:
        self.output_text = output_text
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        return type("Resp", (), {"output_text": self.output_text})()


class _FakeOpenAI:
    def __init__(self, output_text: str = "ok") -> None:
        self.responses = _FakeResponses(output_text)


def test_json_file_storage_round_trips_state(
    tmp_path: Path, profile: UserProfile
) -> None:
    storage = JsonFileStateStorage(data_dir=tmp_path / "data")
    store = StateStore.open(storage)
    store.set_profile(profile)
    meal = make_meal()
    store.add_meal(meal)

    reopened = StateStore.open(JsonFileStateStorage(data_dir=tmp_path / "data"))

    assert storage.path.name == "sehatSenseData.json"
    assert reopened.profile == profile
    assert [item.id for items in reopened.food_log.values() for item in items] == [
        meal.id
    ]
    assert list(storage.path.parent.glob("*.tmp")) == []


def test_json_file_storage_missing_file_reads_none(tmp_path: Path) -> None:
    assert JsonFileStateStorage(data_dir=tmp_path).read() is None


def test_json_file_storage_rejects_non_object(tmp_path: Path) -> None:
    storage = JsonFileStateStorage(data_dir=tmp_path, namespace="broken")
    storage.path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError):
        storage.read()

    assert StateStore.open(storage).profile is None


def test_supabase_storage_upserts_namespace_row() -> None:
    client = FakeSupabaseClient()
    storage = SupabaseStateStorage(client=client, namespace="household")

    assert storage.read() is None
    storage.write({"profile": None, "food_log": {}})
    storage.write({"profile": None, "food_log": {"2024-03-10": []}})

    table = client.tables["app_state"]
    assert table.on_conflict == "namespace"
    assert len(table.rows) == 1
    assert storage.read() == {"profile": None, "food_log": {"2024-03-10": []}}


def test_openai_client_builds_multimodal_input() -> None:
    fake = _FakeOpenAI("HbA1c: 6.1")
    client = OpenAIGenerativeClient(client=fake)  # type: ignore[arg-type]

    result = asyncio.run(
        client.generate(
            GenerationRequest(
                model="gpt-4.1",
                prompt="Extract values",
                attachment=Attachment(data=b"fake", mime_type="image/png"),
            )
        )
    )

    assert result == "HbA1c: 6.1"
    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4.1"
    assert payload["store"] is False
    assert "instructions" not in payload
    content = payload["input"][0]["content"]  # type: ignore[index]
    assert content[0] == {"type": "input_text", "text": "Extract values"}
    assert content[1] == {
        "type": "input_image",
        "image_url": "data:image/png;base64,ZmFrZQ==",
    }


def test_openai_client_sends_pdf_as_file() -> None:
    fake = _FakeOpenAI()
    client = OpenAIGenerativeClient(client=fake)  # type: ignore[arg-type]

    asyncio.run(
        client.generate(
            GenerationRequest(
                model="gpt-4.1",
                prompt="Extract values",
                attachment=Attachment(data=b"%PDF", mime_type="application/pdf"),
            )
        )
    )

    payload = fake.responses.last_payload
    assert payload is not None
    part = payload["input"][0]["content"][1]  # type: ignore[index]
    assert part["type"] == "input_file"
    assert part["file_data"].startswith("data:application/pdf;base64,")


def test_openai_client_replays_history_with_instructions() -> None:
    fake = _FakeOpenAI("Namaste!")
    client = OpenAIGenerativeClient(client=fake)  # type: ignore[arg-type]

    asyncio.run(
        client.generate(
            GenerationRequest(
                model="gpt-4.1-mini",
                prompt="Hello",
                system_instruction="Be kind",
                history=(ConversationTurn(role="model", text="Hi!"),),
            )
        )
    )

    payload = fake.responses.last_payload
    assert payload is not None
    assert payload["instructions"] == "Be kind"
    first_turn = payload["input"][0]  # type: ignore[index]
    assert first_turn == {"role": "assistant", "content": "Hi!"}


def test_openai_client_empty_output_is_unavailable() -> None:
    client = OpenAIGenerativeClient(client=_FakeOpenAI(""))  # type: ignore[arg-type]

    with pytest.raises(ServiceUnavailable):
        asyncio.run(client.generate(GenerationRequest(model="m", prompt="Hi")))


def _response_body(text: str) -> dict[str, object]:
    return {
        "id": "resp_1",
        "object": "response",
        "created_at": 0,
        "model": "gpt-4.1-mini",
        "status": "completed",
        "parallel_tool_calls": False,
        "tool_choice": "auto",
        "tools": [],
        "output": [
            {
                "type": "message",
                "id": "msg_1",
                "role": "assistant",
                "status": "completed",
                "content": [{"type": "output_text", "text": text, "annotations": []}],
            }
        ],
    }


def _openai_client(handler) -> OpenAIGenerativeClient:  # type: ignore[no-untyped-def]
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return OpenAIGenerativeClient(
        client=AsyncOpenAI(api_key="key", http_client=http_client, max_retries=0)
    )


def test_openai_client_over_http_returns_output_text() -> None:
    seen: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path.endswith("/responses")
        seen.append(json.loads(request.content.decode()))
        return httpx.Response(200, json=_response_body("Try jeera water."))

    client = _openai_client(handler)

    result = asyncio.run(client.generate(GenerationRequest(model="m", prompt="Hi")))

    assert result == "Try jeera water."
    assert seen[0]["store"] is False


def test_openai_client_over_http_maps_errors() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(500, json={"error": {"message": "boom"}})

    client = _openai_client(handler)

    with pytest.raises(ServiceUnavailable):
        asyncio.run(client.generate(GenerationRequest(model="m", prompt="Hi")))

    assert len(calls) == 1
