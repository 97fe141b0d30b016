import logging

from fastapi import HTTPException, status
from supabase import AuthError

from agora.core.session import AuthContext

logger = logging.getLogger(__name__)


def supabase_login(auth: AuthContext, email: str, password: str):
    """Inicia sesión en Supabase y devuelve la respuesta (usuario y sesión).

    El mensaje de error del backend se devuelve tal cual en el 401.
    """
    try:
        response = auth.sign_in(email, password)
    except AuthError as e:
        mensaje = getattr(e, "message", None) or str(e)
        logger.warning("Inicio de sesión fallido para %s: %s", email, mensaje)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=mensaje
        )
    return response
