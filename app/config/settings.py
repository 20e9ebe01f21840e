from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # App Info
    app_name: str = "StockControl API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite:///./stockcontrol.db"

    # CORS
    allowed_origins: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Códigos de acceso
    access_code_length: int = Field(default=8, ge=4, le=10, description="Longitud del código (columna varchar(10))")
    access_code_max_attempts: int = Field(default=5, ge=1, description="Reintentos ante colisión de código")
    access_code_max_hours: int = Field(default=8760, ge=1, description="Duración máxima de un código (horas)")

    # Roles (codificación numérica de la tabla roles)
    admin_role_id: int = 2
    current_user_role_id: int = 3

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
