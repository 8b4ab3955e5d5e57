"""Entrega de leads calificados al CRM."""

from __future__ import annotations

from typing import Protocol

from leadbot.core.logging import get_logger, log_event
from leadbot.models.lead import ExtractedLead

logger = get_logger(__name__)


class LeadSink(Protocol):
    """Destino de los leads extraídos al cerrar una conversación."""

    async def publish(self, lead: ExtractedLead) -> None: ...


class LoggingLeadSink:
    """Registra el lead en el log; la integración real con el CRM vive fuera del webhook."""

    async def publish(self, lead: ExtractedLead) -> None:
        log_event(
            logger,
            "lead.qualified",
            sender=lead.sender,
            lead=lead.model_dump(exclude={"raw_response"}),
            degraded=lead.degraded,
        )
