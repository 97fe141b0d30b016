import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse, RedirectResponse
from postgrest.exceptions import APIError

from agora.core.constants import CURSOS, DIVISIONES, EstadoAlumno
from agora.dependencies.auth import require_screen
from agora.dependencies.db import get_supabase
from agora.schemas.alumno import ALUMNO_NUEVO
from agora.services.alumno_service import (
    ErrorFormulario,
    cursos_disponibles,
    filtrar_alumnos,
    guardar_alumno,
    listar_alumnos,
    obtener_alumno,
)

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/alumnos",
    tags=["Alumnos"],
    dependencies=[Depends(require_screen("/alumnos"))]
)

_OPCIONES = {
    "cursos": CURSOS,
    "divisiones": DIVISIONES,
    "estados": [e.value for e in EstadoAlumno],
}


def _errores(e: ErrorFormulario) -> JSONResponse:
    return JSONResponse(status_code=e.status_code, content={"errors": e.errores})


@router.get("")
def get_alumnos(
    supabase=Depends(get_supabase),
    q: str = Query("", description="Busca por nombre, apellido, DNI o legajo"),
    curso: str = Query("", description="Filtra por curso exacto")
):
    """
    Lista de alumnos ordenada por apellido.

    La búsqueda y el filtro por curso se aplican en memoria sobre la lista
    completa. `cursos` trae los cursos presentes para armar el filtro.
    """
    try:
        alumnos = listar_alumnos(supabase)
    except APIError as e:
        logger.error("Error obteniendo alumnos: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener alumnos: {e.message}"
        )

    filtrados = filtrar_alumnos(alumnos, q, curso)
    return {
        "alumnos": filtrados,
        "total": len(filtrados),
        "cursos": cursos_disponibles(alumnos),
    }


@router.get("/nuevo")
def get_alumno_nuevo():
    return {"alumno": dict(ALUMNO_NUEVO), **_OPCIONES}


@router.get("/{alumno_id}")
def get_alumno_by_id(alumno_id: str, supabase=Depends(get_supabase)):
    # Si no se encuentra el alumno se vuelve al listado
    try:
        alumno = obtener_alumno(supabase, alumno_id)
    except APIError as e:
        logger.error("Error obteniendo alumno %s: %s", alumno_id, e.message)
        alumno = None

    if alumno is None:
        return RedirectResponse(url="/alumnos", status_code=status.HTTP_303_SEE_OTHER)

    return {"alumno": alumno, **_OPCIONES}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_alumno(
    datos: dict = Body(...),
    supabase=Depends(get_supabase)
):
    try:
        alumno = guardar_alumno(supabase, datos)
    except ErrorFormulario as e:
        return _errores(e)

    return {"message": "Alumno creado exitosamente", "alumno": alumno}


@router.put("/{alumno_id}")
def update_alumno(
    alumno_id: str,
    datos: dict = Body(...),
    supabase=Depends(get_supabase)
):
    try:
        alumno = guardar_alumno(supabase, datos, alumno_id=alumno_id)
    except ErrorFormulario as e:
        return _errores(e)

    return {"message": "Alumno actualizado exitosamente", "alumno": alumno}
