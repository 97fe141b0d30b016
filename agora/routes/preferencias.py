from fastapi import APIRouter, Request

router = APIRouter(prefix="/preferencias", tags=["Preferencias"])


@router.get("/tema")
def get_tema(request: Request):
    preferencias = request.app.state.preferencias
    return {"tema": preferencias.tema, "oscuro": preferencias.oscuro}


@router.post("/tema/alternar")
def alternar_tema(request: Request):
    preferencias = request.app.state.preferencias
    preferencias.toggle()
    return {"tema": preferencias.tema, "oscuro": preferencias.oscuro}
