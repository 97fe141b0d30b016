import logging

from fastapi import status
from postgrest.exceptions import APIError
from pydantic import ValidationError

from agora.schemas.alumno import MENSAJES_ALUMNO, AlumnoForm, errores_por_campo

logger = logging.getLogger(__name__)

# Código de Postgres para violación de restricción única
UNIQUE_VIOLATION = "23505"


class ErrorFormulario(Exception):
    """Errores del formulario, por campo o en la clave "form" para errores de envío."""

    def __init__(self, errores: dict[str, str], status_code: int = status.HTTP_422_UNPROCESSABLE_ENTITY):
        super().__init__(errores)
        self.errores = errores
        self.status_code = status_code


def listar_alumnos(client) -> list[dict]:
    response = (
        client.table("alumnos")
        .select("*")
        .order("apellido")
        .execute()
    )
    return response.data or []


def filtrar_alumnos(alumnos: list[dict], q: str = "", curso: str = "") -> list[dict]:
    """Búsqueda en memoria por nombre, apellido, DNI o legajo más filtro exacto por curso."""
    termino = (q or "").lower()

    def coincide(alumno):
        campos = ("nombre", "apellido", "dni", "legajo")
        return any(termino in str(alumno.get(campo) or "").lower() for campo in campos)

    return [
        alumno for alumno in alumnos
        if coincide(alumno) and (not curso or alumno.get("curso") == curso)
    ]


def cursos_disponibles(alumnos: list[dict]) -> list[str]:
    return sorted({alumno["curso"] for alumno in alumnos if alumno.get("curso")})


def obtener_alumno(client, alumno_id: str) -> dict | None:
    response = (
        client.table("alumnos")
        .select("*")
        .eq("id", alumno_id)
        .limit(1)
        .execute()
    )
    return response.data[0] if response.data else None


def validar_alumno(datos: dict) -> AlumnoForm:
    try:
        return AlumnoForm.model_validate(datos)
    except ValidationError as e:
        raise ErrorFormulario(errores_por_campo(e, MENSAJES_ALUMNO))


def guardar_alumno(client, datos: dict, alumno_id: str | None = None) -> dict | None:
    """Valida y guarda el alumno: update si hay id, insert si no.

    La validación ocurre antes de cualquier llamada al backend.
    """
    formulario = validar_alumno(datos)
    fila = formulario.model_dump(mode="json")

    try:
        if alumno_id:
            response = client.table("alumnos").update(fila).eq("id", alumno_id).execute()
        else:
            response = client.table("alumnos").insert([fila]).execute()
    except APIError as e:
        logger.error("Error guardando alumno: %s", e.message)
        if e.code == UNIQUE_VIOLATION:
            raise ErrorFormulario(
                {"form": "Ya existe un alumno con ese legajo o DNI"},
                status_code=status.HTTP_409_CONFLICT
            )
        raise ErrorFormulario(
            {"form": e.message or "Error al guardar alumno"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return response.data[0] if response.data else None
