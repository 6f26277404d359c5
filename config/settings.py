"""
Centralized configuration using pydantic-settings.

How it works:
- Reads environment variables automatically (e.g., POSTGRES_HOST env var → Settings.POSTGRES_HOST)
- Falls back to defaults defined here if env vars are not set
- Can also read from a .env file in the project root

The producer, the worker and the API all read the same Settings class,
so the queue name and database they talk to can never drift apart.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── PostgreSQL ──────────────────────────────────────────────
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_DB: str = "weather"

    # ── Redis queue ─────────────────────────────────────────────
    REDIS_URL: str = "redis://localhost:6379/0"
    QUEUE_NAME: str = "weather:jobs"

    # ── Producer ────────────────────────────────────────────────
    INTERVAL_SECONDS: float = 60.0     # seconds between scheduled jobs

    # ── Worker ──────────────────────────────────────────────────
    WORKER_POP_TIMEOUT: int = 5        # seconds BLMOVE waits before re-checking shutdown

    # ── Weather provider ────────────────────────────────────────
    OPEN_METEO_URL: str = "https://api.open-meteo.com/v1/forecast"
    WEATHER_TIMEOUT_SECONDS: float = 5.0

    # ── App ─────────────────────────────────────────────────────
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    RECENT_JOBS_LIMIT: int = 50
    LOG_LEVEL: str = "INFO"

    @property
    def database_url(self) -> str:
        """Async connection string (uses asyncpg driver)."""
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    @property
    def processing_queue_name(self) -> str:
        """Holds messages a worker has popped but not yet acknowledged."""
        return f"{self.QUEUE_NAME}:processing"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton, import this everywhere
settings = Settings()
