import os
from dataclasses import dataclass


# Local SQLite file unless DATABASE_URL is set
DEFAULT_DATABASE_URL = "sqlite:///./tasks.db"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.environ.get("DATABASE_URL", DEFAULT_DATABASE_URL),
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", 8080)),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
        )
