from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, Field, field_validator

from agora.core.constants import PERIODOS, TIPOS_EVALUACION

NOTA_MINIMA = 1
NOTA_MAXIMA = 10


def _parsear_nota(alumno_id: str, valor) -> Optional[float]:
    if valor is None or (isinstance(valor, str) and valor.strip() == ""):
        return None
    try:
        nota = float(valor)
    except (TypeError, ValueError):
        raise ValueError(f"Nota inválida para el alumno {alumno_id}: {valor!r}")
    if not NOTA_MINIMA <= nota <= NOTA_MAXIMA or (nota * 2) % 1 != 0:
        raise ValueError(
            f"La nota del alumno {alumno_id} debe estar entre {NOTA_MINIMA} y {NOTA_MAXIMA} en pasos de 0.5"
        )
    return nota


class CargaNotas(BaseModel):
    """Carga de notas de una evaluación para un curso"""
    materia_id: str = Field(..., min_length=1)
    periodo: str = PERIODOS[0]
    tipo: str = TIPOS_EVALUACION[0]
    fecha: date = Field(default_factory=date.today)
    # alumno_id -> nota; los valores vacíos no se guardan
    notas: dict[str, Union[float, str, None]] = Field(default_factory=dict)

    @field_validator("periodo")
    @classmethod
    def periodo_valido(cls, value):
        if value not in PERIODOS:
            raise ValueError(f"Periodo inválido. Opciones: {', '.join(PERIODOS)}")
        return value

    @field_validator("tipo")
    @classmethod
    def tipo_valido(cls, value):
        if value not in TIPOS_EVALUACION:
            raise ValueError(f"Tipo inválido. Opciones: {', '.join(TIPOS_EVALUACION)}")
        return value

    @field_validator("notas")
    @classmethod
    def notas_validas(cls, value):
        return {alumno_id: _parsear_nota(alumno_id, nota) for alumno_id, nota in value.items()}

    class Config:
        json_schema_extra = {
            "example": {
                "materia_id": "uuid-de-la-materia",
                "periodo": "1º Trimestre",
                "tipo": "Examen",
                "fecha": "2024-04-12",
                "notas": {"uuid-alumno-1": "8.5", "uuid-alumno-2": ""},
            }
        }
