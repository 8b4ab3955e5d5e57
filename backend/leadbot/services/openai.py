"""Cliente centralizado para interactuar con OpenAI."""

from functools import lru_cache

from openai import AsyncOpenAI

from leadbot.core.config import settings


@lru_cache(maxsize=1)
def get_openai_client() -> AsyncOpenAI:
    """Crea un cliente asíncrono reutilizable.

    Los reintentos los maneja `generate_with_retry`, por eso el SDK no reintenta.
    """
    if not settings.openai_api_key:
        msg = "OPENAI_API_KEY is not configured"
        raise RuntimeError(msg)
    return AsyncOpenAI(api_key=settings.openai_api_key, max_retries=0)


async def generate_reply(prompt: str) -> str:
    """Envía el prompt como único mensaje y devuelve el texto generado."""
    client = get_openai_client()
    completion = await client.chat.completions.create(
        model=settings.openai_model,
        messages=[{"role": "user", "content": prompt}],
    )
    content = completion.choices[0].message.content if completion.choices else None
    return (content or "").strip()
