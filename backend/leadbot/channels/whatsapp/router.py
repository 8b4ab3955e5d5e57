"""Endpoints del canal WhatsApp (Twilio)."""

from fastapi import APIRouter, Depends, Response, status
from pydantic import ValidationError

from leadbot.conversations.turns import TurnError, TurnHandler
from leadbot.core.logging import get_logger

from . import service
from .deps import get_inbound_fields, get_turn_handler
from .schemas import WhatsAppMessage

logger = get_logger("leadbot.channels.whatsapp")

router = APIRouter(tags=["whatsapp"])


@router.post("/webhook", summary="Webhook de recepción WhatsApp", response_class=Response)
async def whatsapp_webhook(
    fields: dict[str, str | None] = Depends(get_inbound_fields),
    handler: TurnHandler = Depends(get_turn_handler),
) -> Response:
    """Procesa un mensaje entrante de Twilio.

    Twilio sólo distingue aceptación o rechazo: 200 sin cuerpo si el turno
    terminó, 500 sin cuerpo ante cualquier falla.
    """
    try:
        message = WhatsAppMessage.model_validate(fields)
    except ValidationError as exc:
        logger.error("whatsapp.invalid_payload", extra={"error": str(exc)})
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    try:
        await service.handle_incoming_message(message, handler)
    except TurnError:
        logger.exception("whatsapp.turn_failed", extra={"sender": message.from_})
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except Exception:
        logger.exception("whatsapp.unexpected_error", extra={"sender": message.from_})
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(status_code=status.HTTP_200_OK)
