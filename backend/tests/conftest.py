"""Fixtures compartidas para las pruebas."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from leadbot.conversations.closing import phrase_predicate
from leadbot.conversations.store import ConversationStore
from leadbot.conversations.turns import TurnHandler
from leadbot.main import create_app
from leadbot.models.lead import ExtractedLead


class FakeGenerator:
    """Devuelve respuestas programadas; las excepciones de la cola se lanzan."""

    def __init__(self) -> None:
        self.script: list[str | BaseException] = []
        self.prompts: list[str] = []

    def queue(self, *items: str | BaseException) -> None:
        self.script.extend(items)

    async def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.script.pop(0) if self.script else "Olá! 😊"
        if isinstance(item, BaseException):
            raise item
        return item


class FakeGateway:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.error: Exception | None = None

    async def __call__(self, body: str, to: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((body, to))


class RecordingSink:
    def __init__(self) -> None:
        self.leads: list[ExtractedLead] = []

    async def publish(self, lead: ExtractedLead) -> None:
        self.leads.append(lead)


@pytest.fixture(name="generator")
def fixture_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture(name="gateway")
def fixture_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture(name="lead_sink")
def fixture_lead_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture(name="sleeps")
def fixture_sleeps() -> list[float]:
    return []


@pytest.fixture(name="store")
def fixture_store() -> ConversationStore:
    return ConversationStore()


@pytest.fixture(name="turn_handler")
def fixture_turn_handler(
    store: ConversationStore,
    generator: FakeGenerator,
    gateway: FakeGateway,
    lead_sink: RecordingSink,
    sleeps: list[float],
) -> TurnHandler:
    """Orquestador con colaboradores falsos y esperas instantáneas."""

    async def fake_sleep(delay: float) -> None:
        sleeps.append(delay)

    return TurnHandler(
        store,
        generator,
        gateway,
        is_closing=phrase_predicate("especialista entrará em contato"),
        lead_sink=lead_sink,
        sleep=fake_sleep,
    )


@pytest.fixture(name="async_client")
async def fixture_async_client(turn_handler: TurnHandler) -> AsyncClient:
    """Retorna un cliente asíncrono contra una app con el orquestador de prueba."""
    transport = ASGITransport(app=create_app(turn_handler=turn_handler))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
