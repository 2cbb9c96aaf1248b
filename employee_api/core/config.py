# employee_api/core/config.py
from functools import lru_cache
from fastapi import Request
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STATUS_CODES = {
    "missing_fields": 400,
    "invalid_phone_length": 400,
    "bad_date_format": 400,
    "model_invalid": 400,
    "not_found": 400,
    "search_param_required": 400,
    "no_results": 400,
    "store_error": 500,
}

class Settings(BaseSettings):
    APP_NAME: str = "Employee API"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "CRUD y búsqueda de empleados."
    API_PREFIX: str = ""

    # MySQL
    MYSQL_HOST: str = "localhost"
    MYSQL_PORT: int = 3306
    MYSQL_DB: str = "employees"
    MYSQL_USER: str = "root"
    MYSQL_PASSWORD: str = "2023"
    MYSQL_CHARSET: str = "utf8mb4"
    # si se define, tiene prioridad sobre MYSQL_*
    DATABASE_URL: str | None = None
    DB_CREATE_TABLES: bool = True

    CORS_ORIGINS: list[str] = ["http://localhost:4200"]
    LOG_LEVEL: str = "INFO"

    DATE_FORMAT: str = "%m/%d/%Y"
    WRAP_READ_RESPONSES: bool = False
    STATUS_CODES: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_STATUS_CODES))

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def sqlalchemy_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.MYSQL_USER}:{self.MYSQL_PASSWORD}"
            f"@{self.MYSQL_HOST}:{self.MYSQL_PORT}/{self.MYSQL_DB}"
            f"?charset={self.MYSQL_CHARSET}"
        )

    def status_for(self, kind: str) -> int:
        """Código HTTP para un tipo de resultado; las claves ausentes caen en el default y luego en 400."""
        if kind in self.STATUS_CODES:
            return self.STATUS_CODES[kind]
        return DEFAULT_STATUS_CODES.get(kind, 400)

@lru_cache
def get_settings() -> Settings:
    return Settings()

def get_request_settings(request: Request) -> Settings:
    """Settings de la app que atiende el request (create_app puede recibir unos propios)."""
    settings = getattr(request.app.state, "settings", None)
    return settings if settings is not None else get_settings()
