from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from agora.core.constants import ROLES_NO_DOCENTES

TipoPersonal = Literal["docentes", "no_docentes"]


class NuevoPersonal(BaseModel):
    tipo: TipoPersonal = "docentes"
    nombre: str = Field(..., min_length=1)
    apellido: str = Field(..., min_length=1)
    dni: str = Field(..., min_length=1)
    email: str = ""
    telefono: str = ""
    # Sólo para personal no docente
    rol: Optional[str] = ROLES_NO_DOCENTES[0]

    @field_validator("rol")
    @classmethod
    def rol_valido(cls, value):
        if value is not None and value not in ROLES_NO_DOCENTES:
            raise ValueError(f"Rol inválido. Opciones: {', '.join(ROLES_NO_DOCENTES)}")
        return value
