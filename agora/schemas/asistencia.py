from datetime import date
from typing import Optional

from pydantic import BaseModel, field_validator

from agora.core.constants import EstadoAsistencia


class SeleccionAsistencia(BaseModel):
    """Curso, división y fecha de la planilla. Un valor vacío deja la planilla sin selección."""
    curso: str = ""
    division: str = ""
    fecha: Optional[date] = None

    @field_validator("fecha", mode="before")
    @classmethod
    def vacio_a_none(cls, value):
        if value == "":
            return None
        return value


class MarcaAsistencia(BaseModel):
    estado: EstadoAsistencia
