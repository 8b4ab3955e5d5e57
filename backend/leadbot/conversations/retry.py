"""Reintentos con backoff exponencial para la llamada de generación."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Literal

from leadbot.core.logging import get_logger

logger = get_logger(__name__)

Generate = Callable[[str], Awaitable[str]]
Sleep = Callable[[float], Awaitable[None]]

# Código que el proveedor usa para "servicio saturado, intente más tarde"
TRANSIENT_STATUS_CODE = 503


class GenerationError(RuntimeError):
    """La generación no produjo respuesta; `reason` distingue el motivo."""

    def __init__(
        self,
        message: str,
        *,
        reason: Literal["non_retriable", "retries_exhausted"],
        attempts: int,
    ) -> None:
        super().__init__(message)
        self.reason = reason
        self.attempts = attempts


def is_transient_overload(exc: BaseException) -> bool:
    """True cuando el error trae el status 503 (p. ej. `openai.InternalServerError`)."""
    return getattr(exc, "status_code", None) == TRANSIENT_STATUS_CODE


async def generate_with_retry(
    generate: Generate,
    prompt: str,
    *,
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    sleep: Sleep = asyncio.sleep,
) -> str:
    """Llama a `generate(prompt)` reintentando sólo ante saturación transitoria.

    Hace como máximo `max_attempts` llamadas. Entre intentos espera
    `initial_delay`, `2 * initial_delay`, ... sin jitter. Cualquier otro error
    corta en el acto.

    Raises:
        GenerationError: con `reason="non_retriable"` o `"retries_exhausted"`.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    if initial_delay <= 0:
        raise ValueError("initial_delay must be positive")

    delay = initial_delay
    for attempt in range(1, max_attempts + 1):
        try:
            return await generate(prompt)
        except Exception as exc:
            if not is_transient_overload(exc):
                logger.error(
                    "generation.failed",
                    extra={"attempt": attempt, "error": str(exc), "error_type": type(exc).__name__},
                )
                raise GenerationError(
                    f"Generation failed: {exc}", reason="non_retriable", attempts=attempt
                ) from exc
            if attempt == max_attempts:
                logger.error(
                    "generation.retries_exhausted",
                    extra={"attempts": attempt, "error": str(exc)},
                )
                raise GenerationError(
                    f"Generation service still unavailable after {attempt} attempts",
                    reason="retries_exhausted",
                    attempts=attempt,
                ) from exc
            logger.warning(
                "generation.retrying",
                extra={"attempt": attempt, "delay_seconds": delay, "error": str(exc)},
            )
            await sleep(delay)
            delay *= 2

    raise AssertionError("unreachable")  # pragma: no cover
