# employee_api/routers/system.py
from fastapi import APIRouter, Depends, Request, status
from employee_api.core.config import get_request_settings, Settings

router = APIRouter()

@router.get("/health", tags=["System"], summary="Health check",
            responses={200: {"description": "Service healthy"}})
def health():
    return {"status": "ok"}

@router.get("/info", tags=["System"], summary="Información de la app",
            status_code=status.HTTP_200_OK)
def info(request: Request, settings: Settings = Depends(get_request_settings)):
    # el engine que realmente atiende esta app, no el de la configuración global
    url = request.app.state.engine.url
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "db": url.database,
        "engine": f"SQLAlchemy + {url.get_backend_name()}",
    }
