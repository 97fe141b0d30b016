from fastapi import APIRouter, Depends

from agora.core.navigation import filtrar_navegacion
from agora.core.session import AuthSnapshot
from agora.dependencies.auth import require_screen, require_session

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard")
def get_dashboard(actual: AuthSnapshot = Depends(require_screen("/dashboard"))):
    return {
        "titulo": "Dashboard",
        "mensaje": "Bienvenido al panel de gestión de Ágora.",
        "rol": actual.role,
        "estado_sistema": "En línea",
    }


@router.get("/navegacion")
def get_navegacion(actual: AuthSnapshot = Depends(require_session)):
    """
    Menú lateral filtrado por el rol del usuario.

    Sólo oculta entradas: no impide entrar a una pantalla por su ruta.
    """
    email = actual.email
    return {
        "items": [
            {"label": item.label, "path": item.path}
            for item in filtrar_navegacion(actual.role)
        ],
        "usuario": {
            "email": email,
            "initials": email[:2].upper() if email else None,
            "role": actual.role,
        },
    }
