"""Modelo del lead calificado que se entrega al CRM."""

from typing import Literal

from pydantic import BaseModel


class ExtractedLead(BaseModel):
    """Datos estructurados obtenidos al cerrar una conversación."""

    name: str | None = None
    email: str | None = None
    interest: str | None = None
    sender: str
    transcript: str
    status: Literal["parsed", "unparseable"] = "parsed"
    raw_response: str | None = None

    @property
    def degraded(self) -> bool:
        """Indica que la extracción falló y los campos son valores centinela."""
        return self.status == "unparseable"
