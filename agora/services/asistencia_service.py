"""
Planilla de asistencia de un curso y división para una fecha.

Flujo:
    SIN_SELECCION -> (curso, división y fecha elegidos) -> CARGANDO -> LISTA
    LISTA -> marcar() -> LISTA
    LISTA -> guardar() -> GUARDANDO -> GUARDADA | LISTA (con error)

Los alumnos sin registro para la fecha se muestran como PRESENTE. Ese valor
vive sólo en la planilla hasta que se guarda; `registrados` indica qué
alumnos ya tenían asistencia almacenada.

Cambiar curso, división o fecha descarta las marcas no guardadas.
"""

import logging
import threading
from datetime import date
from enum import Enum

from postgrest.exceptions import APIError

from agora.core.constants import EstadoAlumno, EstadoAsistencia

logger = logging.getLogger(__name__)

ESTADO_POR_DEFECTO = EstadoAsistencia.PRESENTE


class EstadoPlanilla(str, Enum):
    SIN_SELECCION = "SIN_SELECCION"
    CARGANDO = "CARGANDO"
    LISTA = "LISTA"
    GUARDANDO = "GUARDANDO"
    GUARDADA = "GUARDADA"


class AsistenciaError(Exception):
    pass


class PlanillaVaciaError(AsistenciaError):
    pass


class PlanillaAsistencia:
    """Las operaciones toman el lock: la planilla se comparte entre requests del mismo usuario."""

    def __init__(self, client):
        self.client = client
        self._lock = threading.Lock()
        self.curso = ""
        self.division = ""
        self.fecha = date.today().isoformat()
        self.alumnos: list[dict] = []
        self.asistencia: dict[str, EstadoAsistencia] = {}
        self.registrados: set[str] = set()
        self.estado = EstadoPlanilla.SIN_SELECCION
        self.guardado = False
        self.error: str | None = None

    def seleccionar(self, curso: str | None, division: str | None, fecha: str | None):
        curso, division, fecha = curso or "", division or "", fecha or ""

        with self._lock:
            if curso and division and fecha:
                self._cargar(curso, division, fecha)
            else:
                self.curso, self.division, self.fecha = curso, division, fecha
                self._vaciar()
                self.error = None
                self.estado = EstadoPlanilla.SIN_SELECCION

    def cargar(self):
        with self._lock:
            self._cargar(self.curso, self.division, self.fecha)

    def _vaciar(self):
        self.alumnos = []
        self.asistencia = {}
        self.registrados = set()
        self.guardado = False

    def _cargar(self, curso: str, division: str, fecha: str):
        # La planilla anterior sigue vigente hasta que ambas lecturas terminan
        self.estado = EstadoPlanilla.CARGANDO

        try:
            alumnos = (
                self.client.table("alumnos")
                .select("id, nombre, apellido, legajo")
                .eq("curso", curso)
                .eq("division", division)
                .eq("estado", EstadoAlumno.ACTIVO.value)
                .order("apellido")
                .execute()
            ).data or []

            existentes = []
            if alumnos:
                existentes = (
                    self.client.table("asistencias")
                    .select("*")
                    .eq("fecha", fecha)
                    .in_("alumno_id", [a["id"] for a in alumnos])
                    .execute()
                ).data or []
        except APIError as e:
            logger.error("Error cargando asistencias de %s %s (%s): %s", curso, division, fecha, e.message)
            self.curso, self.division, self.fecha = curso, division, fecha
            self._vaciar()
            self.error = "Error al cargar la planilla de asistencia"
            self.estado = EstadoPlanilla.LISTA
            return

        guardados = {r["alumno_id"]: r for r in existentes}
        asistencia = {}
        registrados = set()
        for alumno in alumnos:
            fila = guardados.get(alumno["id"])
            if fila is None:
                asistencia[alumno["id"]] = ESTADO_POR_DEFECTO
                continue
            registrados.add(alumno["id"])
            try:
                asistencia[alumno["id"]] = EstadoAsistencia(fila["estado"])
            except ValueError:
                logger.warning(
                    "Asistencia %s con estado desconocido %r; se muestra como %s",
                    fila.get("id"), fila["estado"], ESTADO_POR_DEFECTO.value
                )
                asistencia[alumno["id"]] = ESTADO_POR_DEFECTO

        self.curso, self.division, self.fecha = curso, division, fecha
        self.alumnos = alumnos
        self.asistencia = asistencia
        self.registrados = registrados
        self.guardado = False
        self.error = None
        self.estado = EstadoPlanilla.LISTA

    def marcar(self, alumno_id: str, estado: EstadoAsistencia):
        with self._lock:
            if alumno_id not in self.asistencia:
                raise KeyError(alumno_id)
            self.asistencia[alumno_id] = EstadoAsistencia(estado)
            self.guardado = False
            self.estado = EstadoPlanilla.LISTA

    def filas(self) -> list[dict]:
        return [
            {
                "alumno_id": alumno["id"],
                "fecha": self.fecha,
                "estado": self.asistencia[alumno["id"]].value,
            }
            for alumno in self.alumnos
        ]

    def guardar(self):
        with self._lock:
            if not self.alumnos:
                raise PlanillaVaciaError("No hay alumnos para guardar")

            self.estado = EstadoPlanilla.GUARDANDO
            self.error = None
            try:
                # Requiere la restricción única (alumno_id, fecha) en la tabla
                self.client.table("asistencias").upsert(
                    self.filas(),
                    on_conflict="alumno_id,fecha"
                ).execute()
            except APIError as e:
                logger.error("Error guardando asistencias del %s: %s", self.fecha, e.message)
                self.error = "Error al guardar asistencias"
                self.estado = EstadoPlanilla.LISTA
                raise AsistenciaError(self.error) from e

            self.registrados = {alumno["id"] for alumno in self.alumnos}
            self.guardado = True
            self.estado = EstadoPlanilla.GUARDADA

    def vista(self) -> dict:
        with self._lock:
            return {
                "estado": self.estado.value,
                "curso": self.curso,
                "division": self.division,
                "fecha": self.fecha,
                "guardado": self.guardado,
                "error": self.error,
                "total": len(self.alumnos),
                "alumnos": [
                    {
                        "id": alumno["id"],
                        "nombre": alumno.get("nombre"),
                        "apellido": alumno.get("apellido"),
                        "legajo": alumno.get("legajo"),
                        "estado": self.asistencia[alumno["id"]].value,
                        "registrado": alumno["id"] in self.registrados,
                    }
                    for alumno in self.alumnos
                ],
            }
