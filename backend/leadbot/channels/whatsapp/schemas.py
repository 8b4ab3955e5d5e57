"""Esquemas Pydantic para payloads de WhatsApp."""

from pydantic import BaseModel, Field


class WhatsAppMessage(BaseModel):
    """Mensaje entrante enviado por Twilio como formulario (`Body`, `From`)."""

    from_: str = Field(min_length=1)
    body: str
    profile_name: str | None = None
