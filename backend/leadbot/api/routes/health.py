"""Endpoint de salud mínimo para validaciones rápidas."""
from fastapi import APIRouter, Request

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", summary="Estado del servicio")
def healthcheck(request: Request) -> dict[str, str | int]:
    """Indica que la API está viva y cuántas conversaciones siguen abiertas."""
    store = request.app.state.turn_handler.store
    return {"status": "ok", "active_conversations": len(store)}
