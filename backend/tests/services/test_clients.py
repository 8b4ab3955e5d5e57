"""Pruebas de los clientes de OpenAI y Twilio."""

from types import SimpleNamespace

import pytest

from leadbot.core.config import settings
from leadbot.services import openai as openai_service
from leadbot.services import twilio as twilio_service


@pytest.fixture(autouse=True)
def clear_client_caches():
    openai_service.get_openai_client.cache_clear()
    twilio_service.get_twilio_client.cache_clear()
    yield
    openai_service.get_openai_client.cache_clear()
    twilio_service.get_twilio_client.cache_clear()


def test_openai_client_requires_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "openai_api_key", None)
    with pytest.raises(RuntimeError):
        openai_service.get_openai_client()


def test_twilio_client_requires_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "twilio_account_sid", None)
    with pytest.raises(RuntimeError):
        twilio_service.get_twilio_client()


async def test_generate_reply_sends_prompt_as_user_message(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    captured: dict[str, object] = {}

    async def fake_create(**kwargs):
        captured.update(kwargs)
        message = SimpleNamespace(content="  Olá! 😊 \n")
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    fake_client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=fake_create)))
    monkeypatch.setattr(openai_service, "get_openai_client", lambda: fake_client)
    monkeypatch.setattr(settings, "openai_model", "gpt-test")

    reply = await openai_service.generate_reply("prompt")

    assert reply == "Olá! 😊"
    assert captured["model"] == "gpt-test"
    assert captured["messages"] == [{"role": "user", "content": "prompt"}]


async def test_generate_reply_handles_empty_content(monkeypatch: pytest.MonkeyPatch) -> None:
    async def fake_create(**kwargs):
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=None))])

    fake_client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=fake_create)))
    monkeypatch.setattr(openai_service, "get_openai_client", lambda: fake_client)

    assert await openai_service.generate_reply("prompt") == ""


async def test_send_whatsapp_message_uses_configured_sender(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    calls: list[dict[str, str]] = []

    def fake_create(**kwargs):
        calls.append(kwargs)
        return SimpleNamespace(sid="SM123")

    fake_client = SimpleNamespace(messages=SimpleNamespace(create=fake_create))
    monkeypatch.setattr(twilio_service, "get_twilio_client", lambda: fake_client)
    monkeypatch.setattr(settings, "twilio_whatsapp_from", "whatsapp:+14155238886")

    await twilio_service.send_whatsapp_message("Olá!", "whatsapp:+5511912345678")

    assert calls == [
        {"body": "Olá!", "from_": "whatsapp:+14155238886", "to": "whatsapp:+5511912345678"}
    ]
