from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    SUPABASE_URL: str | None = None
    SUPABASE_ANON_KEY: str | None = None

    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    # Archivo donde se guarda la preferencia de tema (claro/oscuro)
    PREFERENCES_PATH: str = ".agora_prefs.json"

    # Si es True, cada pantalla rechaza los roles que no figuran en el menú
    ENFORCE_ROUTE_ROLES: bool = False

    PAGOS_LIMITE: int = 50
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
