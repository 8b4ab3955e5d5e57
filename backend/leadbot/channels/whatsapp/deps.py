"""Dependencias reutilizables para rutas de WhatsApp."""

from fastapi import Form, Request

from leadbot.conversations.turns import TurnHandler


def get_turn_handler(request: Request) -> TurnHandler:
    """Devuelve el orquestador creado en `create_app`."""
    return request.app.state.turn_handler


async def get_inbound_fields(
    body: str | None = Form(default=None, alias="Body"),
    from_: str | None = Form(default=None, alias="From"),
    profile_name: str | None = Form(default=None, alias="ProfileName"),
) -> dict[str, str | None]:
    """Lee los campos del formulario sin rechazar el request si faltan.

    La validación ocurre en el router para responder siempre 200 o 500.
    """
    return {"body": body, "from_": from_, "profile_name": profile_name}
