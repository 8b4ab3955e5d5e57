"""Orquestación de un turno de conversación por WhatsApp."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from leadbot.core.logging import get_logger, log_event
from leadbot.models.conversation import ConversationEntry, ConversationState, Role
from leadbot.models.lead import ExtractedLead
from leadbot.services.leads import LeadSink, LoggingLeadSink

from .closing import ClosingPredicate, phrase_predicate
from .extraction import extract_lead
from .prompts import build_turn_prompt
from .retry import Generate, GenerationError, Sleep, generate_with_retry
from .store import ConversationStore

logger = get_logger(__name__)

SendMessage = Callable[[str, str], Awaitable[None]]

DEFAULT_CLOSING_PHRASE = "especialista entrará em contato"


class TurnError(RuntimeError):
    """El turno no produjo respuesta para el cliente."""

    def __init__(self, message: str, *, sender: str) -> None:
        super().__init__(message)
        self.sender = sender


@dataclass(slots=True)
class TurnOutcome:
    sender: str
    reply: str
    closed: bool = False
    lead: ExtractedLead | None = None


class TurnHandler:
    """Coordina store, prompt, generación, envío y cierre de cada mensaje entrante.

    Args:
        store: Conversaciones activas.
        generate: Llamada remota `prompt -> texto`.
        send_message: Envío al gateway `(body, to)`.
        is_closing: Decide si la respuesta cierra la conversación.
        lead_sink: Recibe el lead extraído al cerrar.
        persona: Nombre de la consultora en el prompt y en el historial.
    """

    def __init__(
        self,
        store: ConversationStore,
        generate: Generate,
        send_message: SendMessage,
        *,
        is_closing: ClosingPredicate | None = None,
        lead_sink: LeadSink | None = None,
        persona: str = "Heloísa",
        max_attempts: int = 3,
        initial_delay: float = 1.0,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if initial_delay <= 0:
            raise ValueError("initial_delay must be positive")
        self.store = store
        self._generate = generate
        self._send_message = send_message
        self._is_closing = is_closing or phrase_predicate(DEFAULT_CLOSING_PHRASE)
        self._lead_sink = lead_sink or LoggingLeadSink()
        self._persona = persona
        self._max_attempts = max_attempts
        self._initial_delay = initial_delay
        self._sleep = sleep

    def _render(self, entry: ConversationEntry) -> str:
        return entry.render(assistant_label=self._persona)

    async def handle_turn(self, sender: str, text: str) -> TurnOutcome:
        """Procesa un mensaje del cliente y envía la respuesta generada.

        Raises:
            TurnError: si falla la generación o el envío. La línea del cliente
                queda en el historial y no se agrega respuesta.
        """
        entry = self.store.get_or_create(sender)
        entry.add(Role.CUSTOMER, text)
        entry.state = ConversationState.AWAITING_REPLY

        prompt = build_turn_prompt(self._render(entry), persona=self._persona)
        try:
            reply = await generate_with_retry(
                self._generate,
                prompt,
                max_attempts=self._max_attempts,
                initial_delay=self._initial_delay,
                sleep=self._sleep,
            )
        except GenerationError as exc:
            entry.state = ConversationState.ACTIVE
            raise TurnError(f"No reply generated for {sender}", sender=sender) from exc

        try:
            await self._send_message(reply, sender)
        except Exception as exc:
            entry.state = ConversationState.ACTIVE
            logger.exception("turn.dispatch_failed", extra={"sender": sender})
            raise TurnError(f"Reply could not be delivered to {sender}", sender=sender) from exc

        entry = self.store.get(sender)
        if entry is None:
            # Otro turno del mismo remitente cerró la conversación mientras se generaba esta respuesta
            log_event(logger, "turn.reply_after_close", level=logging.WARNING, sender=sender)
            return TurnOutcome(sender=sender, reply=reply)

        entry.add(Role.ASSISTANT, reply)
        entry.state = ConversationState.ACTIVE
        log_event(logger, "turn.reply_sent", sender=sender, turns=len(entry))

        if not self._is_closing(reply):
            return TurnOutcome(sender=sender, reply=reply)

        lead = await self._close(entry)
        return TurnOutcome(sender=sender, reply=reply, closed=True, lead=lead)

    async def _close(self, entry: ConversationEntry) -> ExtractedLead:
        try:
            lead = await extract_lead(
                self._generate,
                entry.sender,
                self._render(entry),
                max_attempts=self._max_attempts,
                initial_delay=self._initial_delay,
                sleep=self._sleep,
            )
            try:
                await self._lead_sink.publish(lead)
            except Exception:
                logger.exception("lead.publish_failed", extra={"sender": entry.sender})
        finally:
            self.store.evict(entry.sender)
        return lead
