import pytest
from fastapi.testclient import TestClient

from agora.core.config import Settings
from agora.main import create_app
from tests.fakes import FakeSupabase, crear_usuario, login


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        SUPABASE_URL=None,
        SUPABASE_ANON_KEY=None,
        PREFERENCES_PATH=str(tmp_path / "prefs.json"),
    )


@pytest.fixture
def app(settings, supabase):
    return create_app(settings, client=supabase)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_client(client, supabase):
    crear_usuario(supabase, "admin@agora.edu.ar", "ADMIN")
    response = login(client, "admin@agora.edu.ar")
    assert response.status_code == 200
    supabase.calls.clear()
    return client
