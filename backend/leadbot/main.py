"""Punto de entrada principal para la aplicación FastAPI."""

import logging
from pathlib import Path

from fastapi import FastAPI

from leadbot.api.routes.health import router as health_router
from leadbot.channels.whatsapp.router import router as whatsapp_router
from leadbot.conversations.closing import phrase_predicate
from leadbot.conversations.store import ConversationStore
from leadbot.conversations.turns import TurnHandler
from leadbot.core.config import settings
from leadbot.core.logging import configure_logging, get_logger, log_event, resolve_log_level
from leadbot.core.middleware import RequestLoggingMiddleware
from leadbot.services import openai as openai_service
from leadbot.services import twilio as twilio_service
from leadbot.services.leads import LoggingLeadSink


def build_turn_handler(store: ConversationStore | None = None) -> TurnHandler:
    """Arma el orquestador con los clientes reales de OpenAI y Twilio."""
    return TurnHandler(
        store if store is not None else ConversationStore(),
        openai_service.generate_reply,
        twilio_service.send_whatsapp_message,
        is_closing=phrase_predicate(settings.closing_phrase),
        lead_sink=LoggingLeadSink(),
        persona=settings.persona_name,
        max_attempts=settings.generation_max_attempts,
        initial_delay=settings.generation_initial_delay,
    )


def create_app(*, turn_handler: TurnHandler | None = None) -> FastAPI:
    """Crea y configura la instancia de FastAPI.

    `turn_handler` permite inyectar colaboradores falsos en pruebas.
    """
    default_log_level = logging.DEBUG if settings.environment != "production" else logging.INFO
    log_level = resolve_log_level(settings.log_level, default=default_log_level)
    per_logger_files = None
    if settings.log_file_path:
        log_dir = Path(settings.log_file_path).parent
        per_logger_files = {
            "leadbot.request": str(log_dir / "request.log"),
            "leadbot.channels.whatsapp": str(log_dir / "whatsapp.log"),
        }

    configure_logging(
        level=log_level,
        log_file=settings.log_file_path,
        per_logger_files=per_logger_files,
    )

    app = FastAPI(title="Leadbot WhatsApp", version="0.1.0")
    app.state.turn_handler = turn_handler if turn_handler is not None else build_turn_handler()

    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router)
    app.include_router(whatsapp_router)

    log_event(
        get_logger("leadbot"),
        "app.created",
        environment=settings.environment,
        model=settings.openai_model,
        closing_phrase=settings.closing_phrase,
    )
    return app


app = create_app()
