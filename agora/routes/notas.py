import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from postgrest.exceptions import APIError

from agora.core.constants import CURSOS, DIVISIONES, PERIODOS, TIPOS_EVALUACION
from agora.dependencies.auth import require_screen
from agora.dependencies.db import get_supabase
from agora.schemas.nota import CargaNotas
from agora.services.nota_service import NotasError, alumnos_del_curso, guardar_notas, listar_materias

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/notas",
    tags=["Notas"],
    dependencies=[Depends(require_screen("/notas"))]
)


@router.get("")
def get_notas_index():
    return {
        "opciones": [
            {"label": "Carga de Notas", "path": "/notas/carga", "descripcion": "Cargar notas de exámenes y trabajos por curso"},
            {"label": "Boletines", "path": "/notas/boletines", "descripcion": "Ver e imprimir boletines de calificaciones"},
        ]
    }


@router.get("/materias")
def get_materias(supabase=Depends(get_supabase)):
    try:
        materias = listar_materias(supabase)
    except APIError as e:
        logger.error("Error obteniendo materias: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener materias: {e.message}"
        )
    return {"materias": materias}


@router.get("/carga")
def get_carga_notas(
    supabase=Depends(get_supabase),
    curso: str = Query(""),
    division: str = Query(""),
    materia_id: str = Query("")
):
    """
    Datos de la pantalla de carga. Los alumnos activos del curso se traen
    sólo cuando curso, división y materia están elegidos.
    """
    try:
        materias = listar_materias(supabase)
        alumnos = []
        if curso and division and materia_id:
            alumnos = alumnos_del_curso(supabase, curso, division)
    except APIError as e:
        logger.error("Error cargando alumnos de %s %s: %s", curso, division, e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener alumnos: {e.message}"
        )

    return {
        "materias": materias,
        "alumnos": alumnos,
        "cursos": CURSOS,
        "divisiones": DIVISIONES,
        "periodos": PERIODOS,
        "tipos": TIPOS_EVALUACION,
    }


@router.post("/carga", status_code=status.HTTP_201_CREATED)
def cargar_notas(
    data: CargaNotas,
    supabase=Depends(get_supabase)
):
    try:
        total = guardar_notas(supabase, data)
    except NotasError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except APIError as e:
        logger.error("Error guardando notas: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al guardar: {e.message}"
        )

    return {"message": "Notas guardadas correctamente", "total": total}
