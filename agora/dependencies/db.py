from fastapi import HTTPException, Request, status


def get_supabase(request: Request):
    supabase = getattr(request.app.state, "supabase", None)
    if supabase is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Supabase no está configurado. Verifica SUPABASE_URL y SUPABASE_ANON_KEY en el .env"
        )
    return supabase
