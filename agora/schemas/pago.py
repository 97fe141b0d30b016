from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from agora.core.constants import MedioPago


def periodo_actual() -> str:
    return date.today().strftime("%Y-%m")


class NuevoPago(BaseModel):
    """Registro de un pago. El alumno se identifica por DNI o por id."""
    dni: Optional[str] = None
    alumno_id: Optional[str] = None
    periodo: str = Field(default_factory=periodo_actual, pattern=r"^\d{4}-\d{2}$")
    monto: float = Field(..., gt=0)
    medio_pago: MedioPago = MedioPago.EFECTIVO
    observacion: str = ""

    @model_validator(mode="after")
    def requiere_alumno(self):
        if not self.dni and not self.alumno_id:
            raise ValueError("Debe indicarse el DNI o el id del alumno")
        return self

    class Config:
        json_schema_extra = {
            "example": {
                "dni": "45123456",
                "periodo": "2024-03",
                "monto": 25000,
                "medio_pago": "TRANSFERENCIA",
                "observacion": "Cuota de marzo",
            }
        }
