import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query, status
from postgrest.exceptions import APIError

from agora.core.constants import NivelIncidente, TipoIncidente
from agora.dependencies.auth import require_screen
from agora.dependencies.db import get_supabase
from agora.schemas.conducta import NuevoIncidente

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/conducta",
    tags=["Conducta"],
    dependencies=[Depends(require_screen("/conducta"))]
)

BUSQUEDA_MINIMA = 3
RESULTADOS_BUSQUEDA = 5


@router.get("")
def get_incidentes(supabase=Depends(get_supabase)):
    try:
        response = (
            supabase.table("conducta_incidentes")
            .select("*, alumno:alumnos(nombre, apellido, curso, division)")
            .order("fecha", desc=True)
            .execute()
        )
    except APIError as e:
        logger.error("Error obteniendo incidentes: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener incidentes: {e.message}"
        )

    incidentes = response.data or []
    return {
        "incidentes": incidentes,
        "total": len(incidentes),
        "tipos": [t.value for t in TipoIncidente],
        "niveles": [n.value for n in NivelIncidente],
    }


@router.get("/alumnos")
def buscar_alumnos(
    supabase=Depends(get_supabase),
    q: str = Query("", description="Apellido o parte del apellido")
):
    """Búsqueda de alumnos por apellido para el formulario de incidentes."""
    if len(q) < BUSQUEDA_MINIMA:
        return {"alumnos": []}

    try:
        response = (
            supabase.table("alumnos")
            .select("id, nombre, apellido, dni")
            .ilike("apellido", f"%{q}%")
            .limit(RESULTADOS_BUSQUEDA)
            .execute()
        )
    except APIError as e:
        logger.error("Error buscando alumnos '%s': %s", q, e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al buscar alumnos: {e.message}"
        )
    return {"alumnos": response.data or []}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_incidente(
    data: NuevoIncidente,
    supabase=Depends(get_supabase)
):
    try:
        response = supabase.table("conducta_incidentes").insert({
            "alumno_id": data.alumno_id,
            "fecha": datetime.now(timezone.utc).isoformat(),
            "tipo": data.tipo.value,
            "nivel": data.nivel.value,
            "descripcion": data.descripcion,
        }).execute()
    except APIError as e:
        logger.error("Error registrando incidente: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al registrar incidente"
        )

    return {"message": "Incidente registrado", "incidente": response.data[0] if response.data else None}
