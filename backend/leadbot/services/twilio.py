"""Cliente centralizado para Twilio."""

from functools import lru_cache

from starlette.concurrency import run_in_threadpool
from twilio.rest import Client

from leadbot.core.config import settings
from leadbot.core.logging import get_logger, log_event

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_twilio_client() -> Client:
    """Retorna el cliente reutilizable de Twilio."""
    if not settings.twilio_account_sid or not settings.twilio_auth_token:
        msg = "Twilio credentials are not configured"
        raise RuntimeError(msg)
    return Client(settings.twilio_account_sid, settings.twilio_auth_token)


async def send_whatsapp_message(body: str, to: str) -> None:
    """Envía `body` a `to` desde el número configurado.

    El SDK de Twilio es síncrono; la llamada corre en el threadpool de Starlette.
    """
    client = get_twilio_client()
    message = await run_in_threadpool(
        client.messages.create,
        body=body,
        from_=settings.twilio_whatsapp_from,
        to=to,
    )
    log_event(logger, "twilio.message_sent", to=to, message_sid=getattr(message, "sid", None))
