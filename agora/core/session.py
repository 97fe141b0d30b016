"""
Contexto de autenticación de la aplicación.

Reemplaza el estado global de sesión: se crea en el lifespan de FastAPI,
se inicializa al arrancar (`init`) y se libera al detenerse (`teardown`).
Las rutas lo reciben por dependencia (ver agora.dependencies.auth).

Los cambios de sesión del cliente llegan siempre por la suscripción a
`auth.on_auth_state_change`; `sign_in` y `sign_out` sólo le piden la
operación al backend.

Cada request se identifica con su propio access token (`resolve`): la sesión
del cliente no autoriza a nadie más. Los roles quedan en caché por usuario
hasta el próximo cierre de sesión.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any

from postgrest.exceptions import APIError
from supabase import AuthError

logger = logging.getLogger(__name__)


@dataclass
class AuthSnapshot:
    session: Any
    user: Any
    role: str | None
    loading: bool

    @property
    def email(self) -> str | None:
        return getattr(self.user, "email", None) if self.user else None


class AuthContext:
    def __init__(self, client):
        self.client = client
        self._lock = threading.Lock()
        self._session = None
        self._user = None
        self._role = None
        self._loading = True
        self._subscription = None
        self._roles: dict[str, str] = {}

    def init(self):
        session = self.client.auth.get_session()
        self._apply(session)
        self._subscription = self.client.auth.on_auth_state_change(self._on_auth_change)

    def teardown(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        with self._lock:
            self._session = None
            self._user = None
            self._role = None
            self._loading = True
            self._roles.clear()

    def _on_auth_change(self, event, session):
        logger.info("Cambio de sesión: %s", event)
        self._apply(session)

    def _apply(self, session):
        user = getattr(session, "user", None) if session else None
        with self._lock:
            self._session = session
            self._user = user
            if user is None:
                self._role = None
                self._loading = False
                self._roles.clear()
                return
            self._loading = True

        role = self.fetch_role(user.id)
        with self._lock:
            if role is not None:
                self._roles[str(user.id)] = role
            # Otro evento pudo reemplazar la sesión mientras se consultaba el rol
            if self._user is user:
                self._role = role
                self._loading = False

    def fetch_role(self, user_id: str) -> str | None:
        try:
            response = (
                self.client.table("profiles")
                .select("role")
                .eq("id", user_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            logger.error("Error obteniendo el rol de %s: %s", user_id, e.message)
            return None

        if not response.data:
            logger.error("El usuario %s no tiene perfil", user_id)
            return None
        return response.data[0].get("role")

    def role_for(self, user_id: str) -> str | None:
        user_id = str(user_id)
        with self._lock:
            if user_id in self._roles:
                return self._roles[user_id]

        role = self.fetch_role(user_id)
        if role is not None:
            with self._lock:
                self._roles[user_id] = role
        return role

    def resolve(self, access_token: str) -> AuthSnapshot | None:
        """Usuario y rol dueños de `access_token`, o None si el backend no lo acepta."""
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as e:
            logger.info("Token rechazado: %s", e.message)
            return None

        user = getattr(response, "user", None) if response else None
        if user is None:
            return None
        return AuthSnapshot(
            session=access_token,
            user=user,
            role=self.role_for(user.id),
            loading=False,
        )

    def sign_in(self, email: str, password: str):
        return self.client.auth.sign_in_with_password({"email": email, "password": password})

    def sign_out(self, access_token: str | None = None):
        """Cierra la sesión dueña de `access_token`.

        Si es la sesión del cliente (o no se indica token) se cierra por
        `auth.sign_out` y el cambio llega por la suscripción; si no, sólo se
        revoca ese token.
        """
        actual = self.snapshot().session
        if access_token is None or getattr(actual, "access_token", None) == access_token:
            self.client.auth.sign_out()
            return

        try:
            self.client.auth.admin.sign_out(access_token)
        except AuthError as e:
            logger.warning("No se pudo revocar el token: %s", e.message)
        with self._lock:
            self._roles.clear()

    def snapshot(self) -> AuthSnapshot:
        with self._lock:
            return AuthSnapshot(
                session=self._session,
                user=self._user,
                role=self._role,
                loading=self._loading,
            )
