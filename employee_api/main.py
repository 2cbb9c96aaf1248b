# employee_api/main.py
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.engine import Engine
from employee_api.core.config import Settings, get_request_settings, get_settings
from employee_api.core.logging import configure_logging
from employee_api.db import build_engine, build_session_factory, init_db
from employee_api.errors import StoreError, ValidationError
from employee_api.routers import employees, ingestion, system
from employee_api.schemas import Envelope

logger = logging.getLogger(__name__)

tags_metadata = [
    {"name": "System", "description": "Salud del servicio y metadatos."},
    {"name": "Employees", "description": "CRUD y búsqueda de empleados."},
    {"name": "Ingestion", "description": "Carga de CSV (1–1000 filas)."},
]

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    if settings.DB_CREATE_TABLES:
        init_db(app.state.engine)
    yield
    app.state.engine.dispose()

def _error_response(status_code: int, message: str) -> JSONResponse:
    body = Envelope(message=message, succeeded=False)
    return JSONResponse(status_code=status_code, content=body.model_dump())

def _format_request_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "Invalid request: " + "; ".join(parts)

def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return _error_response(get_request_settings(request).status_for(exc.kind), exc.message)

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError):
        return _error_response(get_request_settings(request).status_for("store_error"), exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        err = ValidationError.model_invalid(_format_request_errors(exc))
        return _error_response(get_request_settings(request).status_for(err.kind), err.message)

def _log_routes(routes) -> None:
    # los routers montados en versiones recientes de FastAPI no tienen .path
    for r in routes:
        path = getattr(r, "path", None)
        if path is None:
            continue
        logger.debug("route %s %s", path, sorted(getattr(r, "methods", None) or []))

def create_app(settings: Settings | None = None, engine: Engine | None = None) -> FastAPI:
    """Crea la app con su propio engine; se puede inyectar uno ya construido (p. ej. en pruebas)."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=settings.APP_DESCRIPTION,
        openapi_tags=tags_metadata,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine if engine is not None else build_engine(settings.sqlalchemy_url)
    app.state.session_factory = build_session_factory(app.state.engine)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Redirige "/" -> "/docs"
    @app.get("/", include_in_schema=False)
    def root():
        return RedirectResponse(url="/docs")
    app.include_router(system.router, prefix=settings.API_PREFIX)
    app.include_router(employees.router, prefix=settings.API_PREFIX)
    app.include_router(ingestion.router, prefix=settings.API_PREFIX)
    _log_routes(app.routes)
    return app

app = create_app()
