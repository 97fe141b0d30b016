from types import SimpleNamespace

from fastapi.testclient import TestClient

from agora.core.session import AuthContext
from agora.main import create_app
from tests.fakes import FakeSupabase, alumno, api_error, crear_usuario, login


def test_init_sin_sesion():
    db = FakeSupabase()
    auth = AuthContext(db)
    auth.init()

    actual = auth.snapshot()
    assert actual.session is None
    assert actual.role is None
    assert actual.loading is False
    assert len(db.auth.listeners) == 1


def test_init_con_sesion_existente_resuelve_rol():
    db = FakeSupabase()
    user = crear_usuario(db, "docente@agora.edu.ar", "DOCENTE")
    db.auth.session = SimpleNamespace(user=user)

    auth = AuthContext(db)
    auth.init()

    actual = auth.snapshot()
    assert actual.user is user
    assert actual.role == "DOCENTE"
    assert actual.email == "docente@agora.edu.ar"


def test_cambios_de_sesion_llegan_por_suscripcion():
    db = FakeSupabase()
    crear_usuario(db, "tesoreria@agora.edu.ar", "TESORERIA")
    auth = AuthContext(db)
    auth.init()

    auth.sign_in("tesoreria@agora.edu.ar", "secreto123")
    assert auth.snapshot().role == "TESORERIA"

    auth.sign_out()
    actual = auth.snapshot()
    assert actual.session is None
    assert actual.user is None
    assert actual.role is None


def test_error_de_rol_deja_rol_vacio():
    db = FakeSupabase()
    user = crear_usuario(db, "x@agora.edu.ar", "ADMIN")
    db.auth.session = SimpleNamespace(user=user)
    db.fail("profiles", "select", api_error("permission denied"))

    auth = AuthContext(db)
    auth.init()

    actual = auth.snapshot()
    assert actual.session is not None
    assert actual.role is None
    assert actual.loading is False


def test_usuario_sin_perfil():
    db = FakeSupabase()
    user = db.auth.add_user("sinperfil@agora.edu.ar", "x")
    db.auth.session = SimpleNamespace(user=user)

    auth = AuthContext(db)
    auth.init()

    assert auth.snapshot().role is None


def test_teardown_cancela_suscripcion():
    db = FakeSupabase()
    auth = AuthContext(db)
    auth.init()
    auth.teardown()

    assert db.auth.listeners == []


# Guarda de rutas


def test_sin_sesion_redirige_a_login(client):
    response = client.get("/alumnos", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_login_y_me(client, supabase):
    crear_usuario(supabase, "secretaria@agora.edu.ar", "SECRETARIA")

    response = login(client, "secretaria@agora.edu.ar")
    assert response.status_code == 200
    assert response.json()["user"]["role"] == "SECRETARIA"
    assert response.json()["user"]["initials"] == "SE"

    response = client.get("/auth/me")
    assert response.status_code == 200
    assert response.json()["email"] == "secretaria@agora.edu.ar"


def test_login_con_credenciales_invalidas(client, supabase):
    crear_usuario(supabase, "secretaria@agora.edu.ar", "SECRETARIA")

    response = client.post("/auth/login", json={"email": "secretaria@agora.edu.ar", "password": "mal"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid login credentials"


def test_logout_limpia_sesion_y_protege_rutas(admin_client, app):
    response = admin_client.post("/auth/logout", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"

    actual = app.state.auth.snapshot()
    assert actual.session is None
    assert actual.role is None

    for path in ("/dashboard", "/asistencias", "/pagos", "/navegacion"):
        response = admin_client.get(path, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/login"


def test_pantalla_login_publica(client):
    response = client.get("/login")
    assert response.status_code == 200
    assert response.json()["autenticado"] is False


def test_sin_supabase_configurado(settings):
    app = create_app(settings)
    with TestClient(app) as test_client:
        response = test_client.get("/alumnos")
    assert response.status_code == 503


def test_otro_cliente_sin_token_no_hereda_la_sesion(app, admin_client, supabase):
    supabase.tables["alumnos"] = [alumno("a", "Acosta")]
    assert admin_client.get("/alumnos").status_code == 200

    anonimo = TestClient(app)
    for path in ("/alumnos", "/asistencias", "/auth/me"):
        response = anonimo.get(path, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/login"
    assert anonimo.get("/login").json()["autenticado"] is False


def test_token_invalido_redirige_a_login(admin_client):
    response = admin_client.get("/alumnos", headers={"Authorization": "Bearer inventado"}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/login"


def test_login_devuelve_token(client, supabase):
    crear_usuario(supabase, "docente@agora.edu.ar", "DOCENTE")

    data = login(client, "docente@agora.edu.ar").json()
    assert data["token_type"] == "bearer"
    assert data["access_token"] in supabase.auth.tokens
    assert client.get("/login").json()["autenticado"] is True


def test_cada_cliente_ve_su_usuario(app, admin_client, supabase):
    crear_usuario(supabase, "docente@agora.edu.ar", "DOCENTE")
    docente = TestClient(app)
    login(docente, "docente@agora.edu.ar")

    assert admin_client.get("/auth/me").json()["role"] == "ADMIN"
    assert docente.get("/auth/me").json()["role"] == "DOCENTE"

    response = admin_client.post("/auth/logout", follow_redirects=False)
    assert response.status_code == 303

    assert admin_client.get("/auth/me", follow_redirects=False).status_code == 303
    assert docente.get("/auth/me").json()["email"] == "docente@agora.edu.ar"
