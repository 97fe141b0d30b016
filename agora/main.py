import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse

from agora.core.config import Settings, settings
from agora.core.preferences import ThemePreferences
from agora.core.session import AuthContext
from agora.dependencies.auth import SesionCargando, SesionRequerida
from agora.integrations.supabase_client import crear_cliente
from agora.routes.actividades import router as actividades_router
from agora.routes.alumnos import router as alumnos_router
from agora.routes.asistencias import router as asistencias_router
from agora.routes.auth import router as auth_router
from agora.routes.conducta import router as conducta_router
from agora.routes.dashboard import router as dashboard_router
from agora.routes.dias_inhabiles import router as dias_inhabiles_router
from agora.routes.notas import router as notas_router
from agora.routes.pagos import router as pagos_router
from agora.routes.personal import router as personal_router
from agora.routes.preferencias import router as preferencias_router
from agora.schemas import errores_por_campo

logger = logging.getLogger(__name__)


def configurar_logging(level: str):
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Inicializa el contexto de autenticación y la preferencia de tema al
    arrancar, y los libera al detenerse.
    """
    configurar_logging(app.state.settings.LOG_LEVEL)
    app.state.preferencias.load()

    supabase = app.state.supabase
    if supabase is None:
        logger.warning("SUPABASE_URL/SUPABASE_ANON_KEY no configurados: las pantallas responderán 503")
        app.state.auth = None
    else:
        auth = AuthContext(supabase)
        auth.init()
        app.state.auth = auth
        logger.info("Contexto de autenticación inicializado")

    yield

    if app.state.auth is not None:
        app.state.auth.teardown()
        app.state.auth = None


def create_app(app_settings: Settings | None = None, client=None) -> FastAPI:
    app_settings = app_settings or settings

    app = FastAPI(title="Ágora", lifespan=lifespan)
    app.state.settings = app_settings
    app.state.supabase = client if client is not None else crear_cliente(app_settings)
    app.state.preferencias = ThemePreferences(app_settings.PREFERENCES_PATH)
    app.state.auth = None
    app.state.planillas = {}

    # ---------------------------------------------------------------------------
    # CORS
    # ---------------------------------------------------------------------------
    # Orígenes permitidos del frontend. Evita "*" cuando allow_credentials=True.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Content-Type",
            "Authorization",
            "X-Requested-With",
            "Accept",
            "Origin",
        ],
    )

    @app.exception_handler(SesionRequerida)
    async def redirigir_a_login(request: Request, exc: SesionRequerida):
        return RedirectResponse(url="/login", status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(SesionCargando)
    async def sesion_cargando(request: Request, exc: SesionCargando):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Cargando sesión"},
            headers={"Retry-After": "1"},
        )

    @app.exception_handler(RequestValidationError)
    async def errores_de_validacion(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"errors": errores_por_campo(exc)},
        )

    app.include_router(auth_router)
    app.include_router(dashboard_router)
    app.include_router(alumnos_router)
    app.include_router(asistencias_router)
    app.include_router(notas_router)
    app.include_router(pagos_router)
    app.include_router(conducta_router)
    app.include_router(actividades_router)
    app.include_router(personal_router)
    app.include_router(dias_inhabiles_router)
    app.include_router(preferencias_router)

    @app.get("/")
    def index():
        return RedirectResponse(url="/dashboard", status_code=status.HTTP_303_SEE_OTHER)

    @app.get("/help")
    def help_endpoint():
        return {
            "status": "ok",
            "routes": [
                "/login", "/dashboard", "/navegacion", "/alumnos", "/asistencias",
                "/notas", "/pagos", "/conducta", "/actividades", "/personal",
                "/dias-inhabiles", "/preferencias/tema", "/help", "/docs",
            ],
            "endpoints": {
                "/auth/login": {
                    "POST": "Devuelve access_token; las pantallas lo esperan en Authorization: Bearer <token>",
                },
                "/asistencias": {
                    "GET": "Planilla actual (curso, división, fecha y estado de cada alumno)",
                    "PUT /seleccion": "Elige curso, división y fecha; carga alumnos activos y asistencias guardadas",
                    "PATCH /alumnos/{id}": "Cambia el estado: PRESENTE | AUSENTE | TARDE | JUSTIFICADA",
                    "POST /guardar": "Guarda toda la planilla en un único upsert por (alumno_id, fecha)",
                },
                "/alumnos": {
                    "GET": "Lista con búsqueda (q) por nombre, apellido, DNI o legajo y filtro por curso",
                },
            },
        }

    return app


app = create_app()
