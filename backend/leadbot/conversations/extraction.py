"""Extracción de datos del lead a partir del historial cerrado."""

from __future__ import annotations

import asyncio
import json
import re
from dataclasses import dataclass, field
from typing import Any

from leadbot.core.logging import get_logger, log_event
from leadbot.models.lead import ExtractedLead

from .prompts import build_extraction_prompt
from .retry import Generate, GenerationError, Sleep, generate_with_retry

logger = get_logger(__name__)

EXTRACTION_SENTINEL = "não foi possível extrair"
LEAD_FIELDS = ("name", "email", "interest")

# Greedy: desde la primera "{" hasta la última "}"
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(slots=True, frozen=True)
class ParsedLead:
    fields: dict[str, str | None] = field(default_factory=dict)


@dataclass(slots=True, frozen=True)
class UnparseableLead:
    raw_text: str
    reason: str


def _normalise_value(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_lead_response(text: str) -> ParsedLead | UnparseableLead:
    """Busca un objeto JSON dentro de texto libre y toma `name`, `email` e `interest`."""
    match = _JSON_OBJECT.search(text or "")
    if match is None:
        return UnparseableLead(raw_text=text, reason="no_json_object")
    try:
        data = json.loads(match.group(0))
    except (ValueError, RecursionError):
        # JSONDecodeError, enteros de más de 4300 dígitos o anidamiento excesivo
        return UnparseableLead(raw_text=text, reason="invalid_json")
    if not isinstance(data, dict):
        return UnparseableLead(raw_text=text, reason="not_an_object")
    return ParsedLead(fields={key: _normalise_value(data.get(key)) for key in LEAD_FIELDS})


async def extract_lead(
    generate: Generate,
    sender: str,
    transcript: str,
    *,
    max_attempts: int = 3,
    initial_delay: float = 1.0,
    sleep: Sleep = asyncio.sleep,
) -> ExtractedLead:
    """Pide al modelo los datos del lead; ante cualquier falla usa valores centinela.

    Nunca propaga `GenerationError`: la respuesta al cliente ya fue enviada.
    """
    raw_response: str | None = None
    try:
        raw_response = await generate_with_retry(
            generate,
            build_extraction_prompt(transcript),
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            sleep=sleep,
        )
    except GenerationError as exc:
        logger.warning(
            "lead.extraction_generation_failed",
            extra={"sender": sender, "reason": exc.reason, "error": str(exc)},
        )
        result: ParsedLead | UnparseableLead = UnparseableLead(
            raw_text="", reason=f"generation_{exc.reason}"
        )
    else:
        result = parse_lead_response(raw_response)

    if isinstance(result, ParsedLead):
        return ExtractedLead(
            **result.fields,
            sender=sender,
            transcript=transcript,
            status="parsed",
            raw_response=raw_response,
        )

    log_event(
        logger,
        "lead.extraction_unparseable",
        sender=sender,
        reason=result.reason,
        raw_response=result.raw_text,
    )
    return ExtractedLead(
        name=EXTRACTION_SENTINEL,
        email=EXTRACTION_SENTINEL,
        interest=EXTRACTION_SENTINEL,
        sender=sender,
        transcript=transcript,
        status="unparseable",
        raw_response=raw_response,
    )
