"""Modelos en memoria para conversaciones de WhatsApp."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Role(str, Enum):
    """Autor de una línea del historial."""

    CUSTOMER = "customer"
    ASSISTANT = "assistant"


class ConversationState(str, Enum):
    """Estado de una conversación que tiene entrada en el store.

    `new` y `closed` no se representan: equivalen a que no exista entrada.
    """

    AWAITING_REPLY = "awaiting_reply"
    ACTIVE = "active"


@dataclass(slots=True, frozen=True)
class Turn:
    role: Role
    text: str


@dataclass(slots=True)
class ConversationEntry:
    """Historial acumulado de un remitente."""

    sender: str
    turns: list[Turn] = field(default_factory=list)
    state: ConversationState = ConversationState.ACTIVE
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def add(self, role: Role, text: str) -> Turn:
        turn = Turn(role=role, text=text)
        self.turns.append(turn)
        return turn

    def count(self, role: Role) -> int:
        return sum(1 for turn in self.turns if turn.role is role)

    def render(self, *, customer_label: str = "Cliente", assistant_label: str = "Heloísa") -> str:
        """Devuelve el historial como texto, una línea `Etiqueta: mensaje` por turno."""
        labels = {Role.CUSTOMER: customer_label, Role.ASSISTANT: assistant_label}
        return "".join(f"{labels[turn.role]}: {turn.text}\n" for turn in self.turns)

    def __len__(self) -> int:
        return len(self.turns)
