from agora.schemas.alumno import ALUMNO_NUEVO, MENSAJES_ALUMNO, AlumnoForm, errores_por_campo
from agora.schemas.asistencia import MarcaAsistencia, SeleccionAsistencia
from agora.schemas.nota import CargaNotas
from agora.schemas.pago import NuevoPago
from agora.schemas.conducta import NuevoIncidente
from agora.schemas.personal import NuevoPersonal, TipoPersonal
from agora.schemas.actividad import NuevaActividad
from agora.schemas.dia_inhabil import NuevoDiaInhabil
from agora.schemas.auth import LoginRequest, LoginResponse, UserResponse

__all__ = [
    # Alumno schemas
    "AlumnoForm",
    "ALUMNO_NUEVO",
    "MENSAJES_ALUMNO",
    "errores_por_campo",
    # Asistencia schemas
    "SeleccionAsistencia",
    "MarcaAsistencia",
    # Nota schemas
    "CargaNotas",
    # Pago schemas
    "NuevoPago",
    # Conducta schemas
    "NuevoIncidente",
    # Personal schemas
    "NuevoPersonal",
    "TipoPersonal",
    # Actividad schemas
    "NuevaActividad",
    # Dia inhabil schemas
    "NuevoDiaInhabil",
    # Auth schemas
    "LoginRequest",
    "LoginResponse",
    "UserResponse",
]
