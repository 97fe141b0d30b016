from datetime import date

from pydantic import BaseModel, Field

from agora.core.constants import AlcanceDiaInhabil


class NuevoDiaInhabil(BaseModel):
    fecha: date
    motivo: str = Field(..., min_length=1)
    alcance: AlcanceDiaInhabil = AlcanceDiaInhabil.INSTITUCION
