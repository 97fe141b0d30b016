from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from agora.core.navigation import item_para, puede_ver
from agora.core.session import AuthContext, AuthSnapshot

# Sin auto_error: la falta de token redirige al login en lugar de responder 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


class SesionRequerida(Exception):
    """No hay sesión activa: la pantalla redirige al login."""


class SesionCargando(Exception):
    """La sesión todavía se está resolviendo."""


def get_auth_context(request: Request) -> AuthContext:
    auth = getattr(request.app.state, "auth", None)
    if auth is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase no está configurado. Verifica SUPABASE_URL y SUPABASE_ANON_KEY en el .env"
        )
    return auth


def require_session(
    token: str | None = Depends(oauth2_scheme),
    auth: AuthContext = Depends(get_auth_context)
) -> AuthSnapshot:
    """Sesión del que hace el request, según su access token (Authorization: Bearer)."""
    if auth.snapshot().loading:
        raise SesionCargando()
    if not token:
        raise SesionRequerida()

    actual = auth.resolve(token)
    if actual is None:
        raise SesionRequerida()
    return actual


def require_screen(path: str):
    """Guarda de una pantalla del menú.

    Siempre exige sesión. El control por rol sólo se aplica con
    ENFORCE_ROUTE_ROLES activo; si no, cualquier usuario autenticado entra.
    """
    item = item_para(path)

    def dependency(request: Request, actual: AuthSnapshot = Depends(require_session)) -> AuthSnapshot:
        settings = request.app.state.settings
        if settings.ENFORCE_ROUTE_ROLES and item is not None and not puede_ver(item, actual.role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="No tienes permisos para acceder a esta pantalla"
            )
        return actual

    return dependency
