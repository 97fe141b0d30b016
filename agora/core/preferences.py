import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

TEMA_CLARO = "light"
TEMA_OSCURO = "dark"


class ThemePreferences:
    """Preferencia de tema claro/oscuro persistida en un archivo JSON."""

    def __init__(self, path: str):
        self.path = Path(path)
        self.tema = TEMA_CLARO

    def load(self) -> str:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            data = {}
        except (OSError, ValueError) as e:
            logger.warning("No se pudo leer %s: %s", self.path, e)
            data = {}

        self.tema = TEMA_OSCURO if data.get("theme") == TEMA_OSCURO else TEMA_CLARO
        return self.tema

    @property
    def oscuro(self) -> bool:
        return self.tema == TEMA_OSCURO

    def toggle(self) -> str:
        self.tema = TEMA_CLARO if self.oscuro else TEMA_OSCURO
        self.path.write_text(json.dumps({"theme": self.tema}), encoding="utf-8")
        return self.tema
