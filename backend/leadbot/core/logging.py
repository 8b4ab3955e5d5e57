"""Logging estructurado en JSON para el webhook."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

_MAX_BYTES = 10 * 1024 * 1024
_BACKUP_COUNT = 5


class JSONFormatter(logging.Formatter):
    """Serializa cada registro como una línea JSON con sus campos `extra`."""

    # Atributos estándar de LogRecord que no se copian al payload
    _RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
        "message",
        "asctime",
        "taskName",
    }

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in self._RESERVED:
                payload[key] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, default=str)


def _file_handler(file_path: str) -> RotatingFileHandler:
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        path,
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(JSONFormatter())
    return handler


def configure_logging(
    level: int = logging.INFO,
    *,
    log_file: str | None = None,
    per_logger_files: dict[str, str] | None = None,
) -> None:
    """Reemplaza los handlers raíz por salida JSON a consola y, opcionalmente, a archivos."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setFormatter(JSONFormatter())
    root_logger.addHandler(console)

    targets: dict[str | None, str] = {}
    if log_file:
        targets[None] = log_file
    targets.update(per_logger_files or {})

    for logger_name, file_path in targets.items():
        try:
            logging.getLogger(logger_name).addHandler(_file_handler(file_path))
        except OSError:
            root_logger.exception(
                "logging.file_handler_failed",
                extra={"target_logger": logger_name or "root", "file": file_path},
            )


def resolve_log_level(value: str | int | None, *, default: int = logging.INFO) -> int:
    """Convierte valores configurables (`"debug"`, `"20"`, `10`) a niveles numéricos."""
    if isinstance(value, int):
        return value
    if not isinstance(value, str) or not value.strip():
        return default
    candidate = value.strip()
    if candidate.isdigit():
        return int(candidate)
    mapped = logging.getLevelName(candidate.upper())
    return mapped if isinstance(mapped, int) else default


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def log_event(
    logger: logging.Logger, message: str, *, level: int = logging.INFO, **extra: Any
) -> None:
    """Envía un evento con campos adicionales que el formatter vuelca como JSON."""
    logger.log(level, message, extra=extra or None)
