from supabase import Client, create_client

from agora.core.config import Settings


def crear_cliente(settings: Settings) -> Client | None:
    # Sin URL o clave el servicio arranca igual; las rutas de datos responden 503.
    if not (settings.SUPABASE_URL and settings.SUPABASE_ANON_KEY):
        return None
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY)
