import pytest

from agora.services.alumno_service import ErrorFormulario, filtrar_alumnos, guardar_alumno
from tests.fakes import FakeSupabase, alumno, api_error

ALUMNOS = [
    alumno("1", "Gomez", nombre="Lucía", curso="1º", dni="45111222", legajo="A-001"),
    alumno("2", "Pérez", nombre="Tomás", curso="2º", dni="46333444", legajo="A-002"),
    alumno("3", "Gomeza", nombre="Bruno", curso="2º", dni="47555666", legajo="B-010"),
]


def _formulario(**cambios):
    datos = {
        "legajo": "C-100",
        "nombre": "Sofía",
        "apellido": "Ruiz",
        "dni": "45999888",
        "fecha_nacimiento": "",
        "curso": "3º",
        "division": "B",
        "email": "",
        "estado": "ACTIVO",
    }
    datos.update(cambios)
    return datos


@pytest.mark.parametrize(
    "q, curso, esperado",
    [
        ("", "", ["1", "2", "3"]),
        ("gom", "", ["1", "3"]),
        ("GOM", "2º", ["3"]),
        ("lucía", "", ["1"]),
        ("4633", "", ["2"]),
        ("b-0", "", ["3"]),
        ("zzz", "", []),
        ("", "1º", ["1"]),
    ],
)
def test_busqueda_en_memoria(q, curso, esperado):
    assert [a["id"] for a in filtrar_alumnos(ALUMNOS, q, curso)] == esperado


def test_dni_corto_no_llama_al_backend():
    db = FakeSupabase()

    with pytest.raises(ErrorFormulario) as exc:
        guardar_alumno(db, _formulario(dni="12345"))

    assert exc.value.errores == {"dni": "DNI inválido"}
    assert db.calls == []


def test_campos_requeridos_y_email():
    db = FakeSupabase()

    with pytest.raises(ErrorFormulario) as exc:
        guardar_alumno(db, _formulario(legajo="", nombre="", email="no-es-email"))

    assert exc.value.errores["legajo"] == "Legajo requerido"
    assert exc.value.errores["nombre"] == "Nombre requerido"
    assert exc.value.errores["email"] == "Email inválido"


def test_alta_y_edicion():
    db = FakeSupabase()

    creado = guardar_alumno(db, _formulario())
    assert creado["fecha_nacimiento"] is None
    assert creado["email"] is None

    guardar_alumno(db, _formulario(nombre="Sofía Belén", email="sofi@example.com"), alumno_id=creado["id"])
    assert len(db.tables["alumnos"]) == 1
    assert db.tables["alumnos"][0]["nombre"] == "Sofía Belén"
    assert db.calls == [("alumnos", "insert"), ("alumnos", "update")]


def test_error_de_duplicado():
    db = FakeSupabase()
    db.fail("alumnos", "insert", api_error("duplicate key value", code="23505"))

    with pytest.raises(ErrorFormulario) as exc:
        guardar_alumno(db, _formulario())

    assert exc.value.status_code == 409
    assert "form" in exc.value.errores


# Pantalla


def test_listado(admin_client, supabase):
    supabase.tables["alumnos"] = list(ALUMNOS)

    data = admin_client.get("/alumnos", params={"q": "gom"}).json()
    assert [a["apellido"] for a in data["alumnos"]] == ["Gomez", "Gomeza"]
    assert data["total"] == 2
    assert data["cursos"] == ["1º", "2º"]


def test_formulario_invalido_por_http(admin_client, supabase):
    response = admin_client.post("/alumnos", json=_formulario(dni="12345"))

    assert response.status_code == 422
    assert response.json() == {"errors": {"dni": "DNI inválido"}}
    assert supabase.calls_to("alumnos") == []


def test_crear_y_ver_alumno(admin_client, supabase):
    response = admin_client.post("/alumnos", json=_formulario())
    assert response.status_code == 201
    alumno_id = response.json()["alumno"]["id"]

    response = admin_client.get(f"/alumnos/{alumno_id}")
    assert response.status_code == 200
    assert response.json()["alumno"]["legajo"] == "C-100"


def test_actualizar_alumno(admin_client, supabase):
    supabase.tables["alumnos"] = [dict(ALUMNOS[0])]

    response = admin_client.put("/alumnos/1", json=_formulario(legajo="A-001", apellido="Gomez Paz"))
    assert response.status_code == 200
    assert supabase.tables["alumnos"][0]["apellido"] == "Gomez Paz"


def test_alumno_inexistente_vuelve_al_listado(admin_client):
    response = admin_client.get("/alumnos/no-existe", follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"] == "/alumnos"


def test_formulario_nuevo(admin_client, supabase):
    data = admin_client.get("/alumnos/nuevo").json()
    assert data["alumno"]["curso"] == "1º"
    assert data["alumno"]["estado"] == "ACTIVO"
    assert supabase.calls == []


def test_error_backend_en_envio(admin_client, supabase):
    supabase.fail("alumnos", "insert", api_error("connection refused"))

    response = admin_client.post("/alumnos", json=_formulario())
    assert response.status_code == 500
    assert response.json() == {"errors": {"form": "connection refused"}}
