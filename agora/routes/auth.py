from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from agora.core.session import AuthContext, AuthSnapshot
from agora.dependencies.auth import get_auth_context, oauth2_scheme, require_session
from agora.integrations.supabase_auth import supabase_login
from agora.schemas.auth import LoginRequest, LoginResponse

router = APIRouter(tags=["Auth"])


def _iniciales(email: str | None) -> str | None:
    return email[:2].upper() if email else None


@router.get("/login")
def login_screen(request: Request, token: str | None = Depends(oauth2_scheme)):
    auth = getattr(request.app.state, "auth", None)
    actual = auth.resolve(token) if auth and token else None
    return {
        "screen": "login",
        "autenticado": actual is not None,
        "destino": "/dashboard",
    }


@router.post("/auth/login", response_model=LoginResponse)
def login(
    data: LoginRequest,
    auth: AuthContext = Depends(get_auth_context)
):
    """
    Inicia sesión. El `access_token` devuelto se envía en cada request como
    `Authorization: Bearer <token>`.
    """
    response = supabase_login(auth, data.email, data.password)
    user = response.user

    return {
        "access_token": response.session.access_token,
        "token_type": "bearer",
        "user": {
            "id": str(user.id),
            "email": user.email,
            "role": auth.role_for(user.id),
            "initials": _iniciales(user.email),
        }
    }


@router.get("/auth/me", status_code=status.HTTP_200_OK)
def obtener_usuario_actual(actual: AuthSnapshot = Depends(require_session)):
    return {
        "id": str(actual.user.id),
        "email": actual.email,
        "role": actual.role,
        "initials": _iniciales(actual.email),
    }


@router.post("/auth/logout")
def logout(
    request: Request,
    token: str | None = Depends(oauth2_scheme),
    auth: AuthContext = Depends(get_auth_context)
):
    if token:
        actual = auth.resolve(token)
        auth.sign_out(token)
        # La planilla abierta no sobrevive al cierre de sesión
        if actual is not None:
            request.app.state.planillas.pop(str(actual.user.id), None)
    return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)
