import logging

from fastapi import APIRouter, Depends, HTTPException, status
from postgrest.exceptions import APIError

from agora.core.constants import DIAS_SEMANA
from agora.dependencies.auth import require_screen
from agora.dependencies.db import get_supabase
from agora.schemas.actividad import NuevaActividad

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/actividades",
    tags=["Actividades"],
    dependencies=[Depends(require_screen("/actividades"))]
)


@router.get("")
def get_actividades(supabase=Depends(get_supabase)):
    try:
        response = supabase.table("actividades").select("*").order("nombre").execute()
    except APIError as e:
        logger.error("Error obteniendo actividades: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener actividades: {e.message}"
        )

    actividades = response.data or []
    return {"actividades": actividades, "total": len(actividades), "dias": DIAS_SEMANA}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_actividad(
    data: NuevaActividad,
    supabase=Depends(get_supabase)
):
    try:
        response = supabase.table("actividades").insert(data.model_dump()).execute()
    except APIError as e:
        logger.error("Error creando actividad: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al crear actividad: {e.message}"
        )

    return {"message": "Actividad creada", "actividad": response.data[0] if response.data else None}


@router.delete("/{actividad_id}")
def delete_actividad(actividad_id: str, supabase=Depends(get_supabase)):
    try:
        supabase.table("actividades").delete().eq("id", actividad_id).execute()
    except APIError as e:
        logger.error("Error eliminando actividad %s: %s", actividad_id, e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al eliminar actividad: {e.message}"
        )

    return {"success": True}
