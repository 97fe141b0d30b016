from agora.core.constants import EstadoAlumno
from agora.schemas.nota import CargaNotas


class NotasError(Exception):
    pass


def listar_materias(client) -> list[dict]:
    return client.table("materias").select("*").order("nombre").execute().data or []


def alumnos_del_curso(client, curso: str, division: str) -> list[dict]:
    response = (
        client.table("alumnos")
        .select("id, nombre, apellido")
        .eq("curso", curso)
        .eq("division", division)
        .eq("estado", EstadoAlumno.ACTIVO.value)
        .order("apellido")
        .execute()
    )
    return response.data or []


def preparar_notas(carga: CargaNotas) -> list[dict]:
    """Arma una fila por nota cargada; las vacías se descartan."""
    filas = [
        {
            "alumno_id": alumno_id,
            "materia_id": carga.materia_id,
            "periodo": carga.periodo,
            "tipo": carga.tipo,
            "nota": nota,
            "fecha": carga.fecha.isoformat(),
            "observacion": "",
        }
        for alumno_id, nota in carga.notas.items()
        if nota is not None
    ]
    if not filas:
        raise NotasError("No hay notas para guardar")
    return filas


def guardar_notas(client, carga: CargaNotas) -> int:
    # Sin restricción de unicidad: cargar dos veces la misma evaluación duplica filas
    filas = preparar_notas(carga)
    client.table("notas").insert(filas).execute()
    return len(filas)
