from datetime import date
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator

from agora.core.constants import EstadoAlumno


# Mensajes que se muestran junto a cada campo del formulario
MENSAJES_ALUMNO = {
    "legajo": "Legajo requerido",
    "nombre": "Nombre requerido",
    "apellido": "Apellido requerido",
    "dni": "DNI inválido",
    "curso": "Curso requerido",
    "division": "División requerida",
    "email": "Email inválido",
    "fecha_nacimiento": "Fecha inválida",
    "estado": "Estado inválido",
}


class AlumnoForm(BaseModel):
    """Schema del formulario de alta y edición de alumnos"""
    legajo: str = Field(..., min_length=1)
    nombre: str = Field(..., min_length=1)
    apellido: str = Field(..., min_length=1)
    dni: str = Field(..., min_length=7)
    fecha_nacimiento: Optional[date] = None
    curso: str = Field(..., min_length=1)
    division: str = Field(..., min_length=1)
    email: Optional[EmailStr] = None
    telefono: Optional[str] = None
    direccion: Optional[str] = None
    tutor_nombre: Optional[str] = None
    tutor_telefono: Optional[str] = None
    estado: EstadoAlumno = EstadoAlumno.ACTIVO
    observaciones: Optional[str] = None

    @field_validator("fecha_nacimiento", "email", mode="before")
    @classmethod
    def vacio_a_none(cls, value):
        if value == "":
            return None
        return value

    class Config:
        json_schema_extra = {
            "example": {
                "legajo": "2024-015",
                "nombre": "Juan",
                "apellido": "Pérez",
                "dni": "45123456",
                "fecha_nacimiento": "2012-05-04",
                "curso": "1º",
                "division": "A",
                "email": "juan.perez@example.com",
                "tutor_nombre": "María Pérez",
                "tutor_telefono": "11-5555-1234",
                "estado": "ACTIVO",
            }
        }


def errores_por_campo(exc: ValidationError, mensajes: dict[str, str] | None = None) -> dict[str, str]:
    """Convierte los errores de pydantic en un dict campo -> mensaje.

    Si un campo tiene varios errores se conserva el primero.
    """
    mensajes = mensajes or {}
    errores = {}
    for error in exc.errors():
        campo = next((str(p) for p in error["loc"] if p not in ("body", "query", "path")), "form")
        if campo not in errores:
            errores[campo] = mensajes.get(campo, error["msg"])
    return errores


# Valores iniciales del formulario de alta (/alumnos/nuevo)
ALUMNO_NUEVO = {
    "legajo": "",
    "nombre": "",
    "apellido": "",
    "dni": "",
    "fecha_nacimiento": "",
    "curso": "1º",
    "division": "A",
    "email": "",
    "telefono": "",
    "direccion": "",
    "tutor_nombre": "",
    "tutor_telefono": "",
    "estado": EstadoAlumno.ACTIVO.value,
    "observaciones": "",
}
