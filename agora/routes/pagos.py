import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from postgrest.exceptions import APIError

from agora.core.constants import MedioPago
from agora.dependencies.auth import require_screen
from agora.dependencies.db import get_supabase
from agora.schemas.pago import NuevoPago, periodo_actual
from agora.services.pago_service import buscar_alumno_por_dni, filtrar_pagos, listar_pagos, registrar_pago

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/pagos",
    tags=["Pagos"],
    dependencies=[Depends(require_screen("/pagos"))]
)


@router.get("")
def get_pagos(
    request: Request,
    supabase=Depends(get_supabase),
    q: str = Query("", description="Busca por apellido o DNI del alumno")
):
    """
    Últimos pagos registrados, del más reciente al más antiguo.

    Sólo se traen los últimos PAGOS_LIMITE; la búsqueda se aplica sobre esos.
    """
    limite = request.app.state.settings.PAGOS_LIMITE
    try:
        pagos = listar_pagos(supabase, limite)
    except APIError as e:
        logger.error("Error obteniendo pagos: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error al obtener pagos: {e.message}"
        )

    filtrados = filtrar_pagos(pagos, q)
    return {
        "pagos": filtrados,
        "total": len(filtrados),
        "periodo_actual": periodo_actual(),
        "medios_pago": [m.value for m in MedioPago],
    }


@router.get("/alumno")
def buscar_alumno(
    supabase=Depends(get_supabase),
    dni: str = Query(..., description="DNI del alumno (mínimo 6 dígitos)")
):
    try:
        alumno = buscar_alumno_por_dni(supabase, dni)
    except APIError as e:
        logger.error("Error buscando alumno con DNI %s: %s", dni, e.message)
        alumno = None
    return {"alumno": alumno}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_pago(
    data: NuevoPago,
    supabase=Depends(get_supabase)
):
    try:
        pago = registrar_pago(supabase, data)
    except LookupError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Alumno no encontrado"
        )
    except APIError as e:
        logger.error("Error registrando pago: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error al registrar pago"
        )

    return {"message": "Pago registrado exitosamente", "pago": pago}
