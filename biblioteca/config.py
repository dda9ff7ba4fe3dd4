# biblioteca/config.py
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Aplicação
    app_name: str = os.getenv("APP_NAME", "API Biblioteca Digital")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # Banco de dados
    database_url: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./biblioteca.db")
    database_echo: bool = _as_bool(os.getenv("DATABASE_ECHO", "False"))

    # Logs
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
