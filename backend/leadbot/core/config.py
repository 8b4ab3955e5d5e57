"""Configuración central basada en variables de entorno."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Valores globales leídos desde `.env` o el entorno."""

    environment: str = "development"
    log_level: str | None = Field(
        default=None,
        description="Nivel de logging global (ej. debug, info, warning). Cuando no se define, usa un valor por ambiente.",
    )
    request_log_level: str = Field(
        default="info",
        description=(
            "Nivel con el que se registran las solicitudes exitosas en el middleware. "
            "Valores por debajo del nivel global las ocultan."
        ),
    )
    request_log_skip_prefixes: tuple[str, ...] = Field(
        default=("/health", "/favicon", "/docs", "/openapi"),
        description="Prefijos de ruta para los que no se registrarán eventos de request.started/completed.",
    )
    log_file_path: str | None = None
    host: str = "0.0.0.0"
    port: int = 3000

    openai_api_key: str | None = None
    openai_model: str = "gpt-4o-mini"
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    # Número del sandbox de Twilio para WhatsApp
    twilio_whatsapp_from: str = "whatsapp:+14155238886"

    persona_name: str = "Heloísa"
    closing_phrase: str = Field(
        default="especialista entrará em contato",
        description="Marcador que indica que la respuesta del asistente cierra la conversación.",
    )
    generation_max_attempts: int = Field(default=3, ge=1)
    generation_initial_delay: float = Field(
        default=1.0,
        gt=0,
        description="Espera inicial (segundos) antes del primer reintento; se duplica en cada intento.",
    )
    model_config = SettingsConfigDict(env_file=".env", env_prefix="LEADBOT_", extra="allow")


settings = Settings()
