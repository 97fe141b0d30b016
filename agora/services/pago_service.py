from datetime import datetime, timezone

from agora.core.constants import EstadoPago
from agora.schemas.pago import NuevoPago

DNI_MINIMO_BUSQUEDA = 6


def listar_pagos(client, limite: int) -> list[dict]:
    response = (
        client.table("pagos")
        .select("*, alumno:alumnos(nombre, apellido, dni)")
        .order("created_at", desc=True)
        .limit(limite)
        .execute()
    )
    return response.data or []


def filtrar_pagos(pagos: list[dict], q: str = "") -> list[dict]:
    termino = (q or "").lower()
    resultado = []
    for pago in pagos:
        alumno = pago.get("alumno") or {}
        if termino in (alumno.get("apellido") or "").lower() or termino in (alumno.get("dni") or ""):
            resultado.append(pago)
    return resultado


def buscar_alumno_por_dni(client, dni: str) -> dict | None:
    if len(dni or "") < DNI_MINIMO_BUSQUEDA:
        return None
    response = (
        client.table("alumnos")
        .select("id, nombre, apellido")
        .eq("dni", dni)
        .limit(1)
        .execute()
    )
    return response.data[0] if response.data else None


def registrar_pago(client, pago: NuevoPago) -> dict | None:
    """Registra un pago como PAGADO con fecha de pago actual.

    Lanza LookupError si no se encuentra el alumno por DNI.
    """
    alumno_id = pago.alumno_id
    if not alumno_id:
        alumno = buscar_alumno_por_dni(client, pago.dni)
        if alumno is None:
            raise LookupError(pago.dni)
        alumno_id = alumno["id"]

    response = client.table("pagos").insert({
        "alumno_id": alumno_id,
        "periodo": pago.periodo,
        "monto": pago.monto,
        "estado": EstadoPago.PAGADO.value,
        "fecha_pago": datetime.now(timezone.utc).isoformat(),
        "medio_pago": pago.medio_pago.value,
        "observacion": pago.observacion,
    }).execute()
    return response.data[0] if response.data else None
