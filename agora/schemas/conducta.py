from pydantic import BaseModel, Field

from agora.core.constants import NivelIncidente, TipoIncidente


class NuevoIncidente(BaseModel):
    alumno_id: str = Field(..., min_length=1)
    tipo: TipoIncidente = TipoIncidente.OBSERVACION
    nivel: NivelIncidente = NivelIncidente.BAJO
    descripcion: str = ""
