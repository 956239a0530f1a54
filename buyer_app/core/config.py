# buyer_app/core/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Metadatos
    PROJECT_NAME: str = "FX Buyer API"
    PROJECT_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Nodo FX (servicio externo)
    FX_SERVICE_URL: str = "http://localhost:10050/api/fx"
    FX_SERVICE_TIMEOUT: float = 10.0

    # Rate limiting (requests/minuto por IP)
    RATE_LIMIT: str = "60/minute"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"

    # Servidor
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # TLS (si usas HTTPS directo)
    SSL_KEYFILE: str | None = None
    SSL_CERTFILE: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
