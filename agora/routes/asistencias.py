"""
Pantalla de asistencias.

Cada usuario tiene su planilla en `app.state.planillas` mientras dure su sesión:
1. PUT /asistencias/seleccion elige curso, división y fecha y carga los alumnos.
2. PATCH /asistencias/alumnos/{id} cambia el estado de un alumno.
3. POST /asistencias/guardar hace un único upsert con toda la planilla.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, status

from agora.core.constants import CURSOS, DIVISIONES, EstadoAsistencia
from agora.core.session import AuthSnapshot
from agora.dependencies.auth import require_screen, require_session
from agora.dependencies.db import get_supabase
from agora.schemas.asistencia import MarcaAsistencia, SeleccionAsistencia
from agora.services.asistencia_service import AsistenciaError, PlanillaAsistencia, PlanillaVaciaError

router = APIRouter(
    prefix="/asistencias",
    tags=["Asistencias"],
    dependencies=[Depends(require_screen("/asistencias"))]
)


def get_planilla(
    request: Request,
    actual: AuthSnapshot = Depends(require_session),
    supabase=Depends(get_supabase)
) -> PlanillaAsistencia:
    return request.app.state.planillas.setdefault(str(actual.user.id), PlanillaAsistencia(supabase))


def _vista(planilla: PlanillaAsistencia) -> dict:
    return {
        **planilla.vista(),
        "cursos": CURSOS,
        "divisiones": DIVISIONES,
        "estados": [e.value for e in EstadoAsistencia],
    }


@router.get("")
def get_planilla_asistencia(planilla: PlanillaAsistencia = Depends(get_planilla)):
    return _vista(planilla)


@router.put("/seleccion")
def seleccionar(
    data: SeleccionAsistencia,
    planilla: PlanillaAsistencia = Depends(get_planilla)
):
    """
    Cambia curso, división y fecha. Con los tres completos carga la planilla.
    Las marcas que no se guardaron se descartan sin aviso.
    """
    planilla.seleccionar(
        curso=data.curso,
        division=data.division,
        fecha=data.fecha.isoformat() if data.fecha else None,
    )
    return _vista(planilla)


@router.patch("/alumnos/{alumno_id}")
def marcar_alumno(
    alumno_id: str,
    data: MarcaAsistencia,
    planilla: PlanillaAsistencia = Depends(get_planilla)
):
    try:
        planilla.marcar(alumno_id, data.estado)
    except KeyError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"El alumno {alumno_id} no está en la planilla"
        )
    return _vista(planilla)


@router.post("/guardar")
def guardar_planilla(planilla: PlanillaAsistencia = Depends(get_planilla)):
    try:
        planilla.guardar()
    except PlanillaVaciaError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except AsistenciaError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    return _vista(planilla)
