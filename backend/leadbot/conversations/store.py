"""Store en memoria de conversaciones activas por remitente."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from leadbot.core.logging import get_logger, log_event
from leadbot.models.conversation import ConversationEntry, Role, Turn

logger = get_logger(__name__)


class ConversationStore:
    """Mapa `remitente -> ConversationEntry` que vive mientras vive el proceso.

    No hay locks: dos mensajes simultáneos del mismo remitente pueden
    intercalar sus escrituras. Las entradas no se truncan.
    """

    def __init__(self) -> None:
        self._entries: dict[str, ConversationEntry] = {}

    def get(self, sender: str) -> ConversationEntry | None:
        return self._entries.get(sender)

    def get_or_create(self, sender: str) -> ConversationEntry:
        entry = self._entries.get(sender)
        if entry is None:
            entry = ConversationEntry(sender=sender)
            self._entries[sender] = entry
            log_event(logger, "conversation.created", level=logging.DEBUG, sender=sender)
        return entry

    def append(self, sender: str, role: Role, text: str) -> Turn:
        """Agrega una línea al historial, creando la entrada si no existe."""
        return self.get_or_create(sender).add(role, text)

    def evict(self, sender: str) -> ConversationEntry | None:
        entry = self._entries.pop(sender, None)
        if entry is not None:
            log_event(logger, "conversation.evicted", sender=sender, turns=len(entry))
        return entry

    def __contains__(self, sender: object) -> bool:
        return sender in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))
