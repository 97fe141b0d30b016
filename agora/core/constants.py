"""Listas fijas de opciones que ofrecen los formularios."""

from enum import Enum


class Role(str, Enum):
    ADMIN = "ADMIN"
    SECRETARIA = "SECRETARIA"
    DOCENTE = "DOCENTE"
    PRECEPTOR = "PRECEPTOR"
    TESORERIA = "TESORERIA"


class EstadoAlumno(str, Enum):
    ACTIVO = "ACTIVO"
    INACTIVO = "INACTIVO"


class EstadoAsistencia(str, Enum):
    PRESENTE = "PRESENTE"
    AUSENTE = "AUSENTE"
    TARDE = "TARDE"
    JUSTIFICADA = "JUSTIFICADA"


class EstadoPago(str, Enum):
    PAGADO = "PAGADO"
    PENDIENTE = "PENDIENTE"


class MedioPago(str, Enum):
    EFECTIVO = "EFECTIVO"
    TRANSFERENCIA = "TRANSFERENCIA"
    TARJETA = "TARJETA"


class TipoIncidente(str, Enum):
    OBSERVACION = "OBSERVACION"
    ADVERTENCIA = "ADVERTENCIA"
    AMONESTACION = "AMONESTACION"


class NivelIncidente(str, Enum):
    BAJO = "BAJO"
    MEDIO = "MEDIO"
    ALTO = "ALTO"


class AlcanceDiaInhabil(str, Enum):
    INSTITUCION = "INSTITUCION"
    PRIMARIA = "PRIMARIA"
    SECUNDARIA = "SECUNDARIA"


CURSOS = ["1º", "2º", "3º", "4º", "5º", "6º"]
DIVISIONES = ["A", "B", "C", "D"]

PERIODOS = ["1º Trimestre", "2º Trimestre", "3º Trimestre"]
TIPOS_EVALUACION = ["Examen", "Trabajo Práctico", "Oral", "Concepto"]

DIAS_SEMANA = ["Lunes", "Martes", "Miércoles", "Jueves", "Viernes", "Sábado"]

ROLES_NO_DOCENTES = ["Preceptor", "Tesoreria", "Secretaria", "Maestranza"]

# Tablas de personal según la pestaña elegida
TABLAS_PERSONAL = {
    "docentes": "personal_docentes",
    "no_docentes": "personal_no_docentes",
}
