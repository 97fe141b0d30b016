import logging

from fastapi import APIRouter, Depends, HTTPException, status
from postgrest.exceptions import APIError

from agora.core.constants import AlcanceDiaInhabil
from agora.dependencies.auth import require_screen
from agora.dependencies.db import get_supabase
from agora.schemas.dia_inhabil import NuevoDiaInhabil

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/dias-inhabiles",
    tags=["Días Inhábiles"],
    dependencies=[Depends(require_screen("/dias-inhabiles"))]
)


@router.get("")
def get_dias_inhabiles(supabase=Depends(get_supabase)):
    try:
        response = supabase.table("dias_inhabiles").select("*").order("fecha").execute()
    except APIError as e:
        logger.error("Error obteniendo días inhábiles: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener días inhábiles: {e.message}"
        )

    dias = response.data or []
    return {"dias": dias, "total": len(dias), "alcances": [a.value for a in AlcanceDiaInhabil]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_dia_inhabil(
    data: NuevoDiaInhabil,
    supabase=Depends(get_supabase)
):
    try:
        response = supabase.table("dias_inhabiles").insert({
            "fecha": data.fecha.isoformat(),
            "motivo": data.motivo,
            "alcance": data.alcance.value,
        }).execute()
    except APIError as e:
        logger.error("Error creando día inhábil: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al crear día inhábil: {e.message}"
        )

    return {"message": "Día inhábil creado", "dia": response.data[0] if response.data else None}


@router.delete("/{dia_id}")
def delete_dia_inhabil(dia_id: str, supabase=Depends(get_supabase)):
    try:
        supabase.table("dias_inhabiles").delete().eq("id", dia_id).execute()
    except APIError as e:
        logger.error("Error eliminando día inhábil %s: %s", dia_id, e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al eliminar día inhábil: {e.message}"
        )

    return {"success": True}
