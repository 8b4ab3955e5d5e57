"""Servicios específicos para WhatsApp via Twilio."""

from leadbot.conversations.turns import TurnHandler, TurnOutcome
from leadbot.core.logging import get_logger, log_event

from .schemas import WhatsAppMessage

logger = get_logger("leadbot.channels.whatsapp")


async def handle_incoming_message(message: WhatsAppMessage, handler: TurnHandler) -> TurnOutcome:
    """Registra el mensaje y delega el turno en el orquestador."""
    log_event(
        logger,
        "whatsapp.message_received",
        sender=message.from_,
        body=message.body,
        profile_name=message.profile_name,
    )
    outcome = await handler.handle_turn(message.from_, message.body)
    log_event(
        logger,
        "whatsapp.reply_sent",
        sender=outcome.sender,
        reply=outcome.reply,
        closed=outcome.closed,
    )
    return outcome
