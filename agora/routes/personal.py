import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from postgrest.exceptions import APIError

from agora.core.constants import ROLES_NO_DOCENTES, TABLAS_PERSONAL
from agora.dependencies.auth import require_screen
from agora.dependencies.db import get_supabase
from agora.schemas.personal import NuevoPersonal, TipoPersonal

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/personal",
    tags=["Personal"],
    dependencies=[Depends(require_screen("/personal"))]
)


@router.get("")
def get_personal(
    supabase=Depends(get_supabase),
    tipo: TipoPersonal = Query("docentes", description="'docentes' | 'no_docentes'")
):
    try:
        response = supabase.table(TABLAS_PERSONAL[tipo]).select("*").order("apellido").execute()
    except APIError as e:
        logger.error("Error obteniendo personal %s: %s", tipo, e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener personal: {e.message}"
        )

    personal = response.data or []
    return {
        "tipo": tipo,
        "personal": personal,
        "total": len(personal),
        "roles": ROLES_NO_DOCENTES if tipo == "no_docentes" else [],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
def create_personal(
    data: NuevoPersonal,
    supabase=Depends(get_supabase)
):
    """Alta de personal. El rol sólo se guarda para el personal no docente."""
    payload = data.model_dump(exclude={"tipo"})
    if data.tipo == "docentes":
        payload.pop("rol")

    try:
        response = supabase.table(TABLAS_PERSONAL[data.tipo]).insert(payload).execute()
    except APIError as e:
        logger.error("Error registrando personal: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al registrar personal: {e.message}"
        )

    return {"message": "Personal registrado", "personal": response.data[0] if response.data else None}
