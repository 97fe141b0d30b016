from pydantic import BaseModel, Field, field_validator

from agora.core.constants import DIAS_SEMANA


class NuevaActividad(BaseModel):
    nombre: str = Field(..., min_length=1)
    dia_semana: str = DIAS_SEMANA[0]
    horario: str = Field(..., min_length=1, description="Ej: 14:00 - 16:00")
    cupo: int = Field(20, ge=1)
    responsable: str = Field(..., min_length=1)

    @field_validator("dia_semana")
    @classmethod
    def dia_valido(cls, value):
        if value not in DIAS_SEMANA:
            raise ValueError(f"Día inválido. Opciones: {', '.join(DIAS_SEMANA)}")
        return value
