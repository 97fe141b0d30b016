"""
Tabla estática del menú lateral.

Cada entrada indica qué roles ven el acceso en el menú. El valor especial
"ALL" lo muestra a cualquier usuario con sesión. El filtrado es sólo del
menú: las pantallas no lo aplican salvo que ENFORCE_ROUTE_ROLES esté activo.
"""

from dataclasses import dataclass

from agora.core.constants import Role

ALL = "ALL"

_TODOS_LOS_ROLES = (Role.ADMIN, Role.SECRETARIA, Role.DOCENTE, Role.PRECEPTOR, Role.TESORERIA)


@dataclass(frozen=True)
class NavItem:
    label: str
    path: str
    roles: tuple


NAV_ITEMS = [
    NavItem("Dashboard", "/dashboard", (ALL,)),
    NavItem("Alumnos", "/alumnos", _TODOS_LOS_ROLES),
    NavItem("Asistencias", "/asistencias", (Role.ADMIN, Role.SECRETARIA, Role.PRECEPTOR, Role.DOCENTE)),
    NavItem("Notas", "/notas", (Role.ADMIN, Role.SECRETARIA, Role.DOCENTE)),
    NavItem("Conducta", "/conducta", (Role.ADMIN, Role.SECRETARIA, Role.PRECEPTOR, Role.DOCENTE)),
    NavItem("Pagos", "/pagos", (Role.ADMIN, Role.SECRETARIA, Role.TESORERIA)),
    NavItem("Actividades", "/actividades", (Role.ADMIN, Role.SECRETARIA, Role.DOCENTE)),
    NavItem("Personal", "/personal", (Role.ADMIN, Role.SECRETARIA)),
    NavItem("Días Inhábiles", "/dias-inhabiles", (Role.ADMIN, Role.SECRETARIA)),
]


def puede_ver(item: NavItem, role: str | None) -> bool:
    if ALL in item.roles:
        return True
    return role is not None and role in item.roles


def filtrar_navegacion(role: str | None) -> list[NavItem]:
    return [item for item in NAV_ITEMS if puede_ver(item, role)]


def item_para(path: str) -> NavItem | None:
    """Devuelve la entrada del menú que cubre `path` (incluye subrutas)."""
    for item in NAV_ITEMS:
        if path == item.path or path.startswith(item.path + "/"):
            return item
    return None
