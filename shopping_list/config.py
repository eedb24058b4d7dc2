# shopping_list/config.py
from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


def fix_db_url(url: str) -> str:
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    DATABASE_URL: str = ""

    # used when DATABASE_URL is empty
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_HOST: str = ""
    DB_PORT: str = ""
    DB_NAME: str = "Shopping_List"
    DB_DRIVER: str = "postgresql+asyncpg"

    STORE_BACKEND: str = "sql"  # "sql" | "memory"
    RUN_MIGRATIONS: bool = True

    HOST: str = "0.0.0.0"
    PORT: int = 8080
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_database(self) -> "Settings":
        backend = self.STORE_BACKEND.strip().lower()
        if backend not in {"sql", "memory"}:
            raise ValueError(f"STORE_BACKEND must be 'sql' or 'memory', got {self.STORE_BACKEND!r}")
        self.STORE_BACKEND = backend

        if backend == "sql" and not self.DATABASE_URL:
            missing = [
                k for k in ("DB_USER", "DB_PASSWORD", "DB_HOST", "DB_PORT")
                if not getattr(self, k)
            ]
            if missing:
                raise ValueError(
                    "Database credentials are not fully set: " + ", ".join(missing)
                )
            if not self.DB_PORT.isdigit():
                raise ValueError(f"DB_PORT must be a number, got {self.DB_PORT!r}")
        return self

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return fix_db_url(self.DATABASE_URL)
        # URL.create escapes special characters in the password
        url = URL.create(
            self.DB_DRIVER,
            username=self.DB_USER,
            password=self.DB_PASSWORD,
            host=self.DB_HOST,
            port=int(self.DB_PORT),
            database=self.DB_NAME,
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


settings = Settings()
