"""Detección del mensaje de cierre de una conversación."""

from collections.abc import Callable

ClosingPredicate = Callable[[str], bool]


def phrase_predicate(marker: str) -> ClosingPredicate:
    """Predicado que busca `marker` dentro de la respuesta sin distinguir mayúsculas.

    Un marcador vacío nunca cierra conversaciones.
    """
    needle = marker.strip().casefold()

    def is_closing(reply: str) -> bool:
        return bool(needle) and needle in reply.casefold()

    return is_closing
