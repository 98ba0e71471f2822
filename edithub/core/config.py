from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # SQLite by default, any SQLAlchemy URL works.
    DATABASE_URL: str = "sqlite:///./edithub.db"

    # --- Session cookie ---
    SESSION_SECRET: str = ""
    AUTH_REMEMBER_DAYS: int = 30
    COOKIE_SECURE: bool = False

    # --- Streamable ---
    STREAMABLE_API_URL: str = "https://api.streamable.com"
    STREAMABLE_USERNAME: str | None = None
    STREAMABLE_PASSWORD: str | None = None
    STREAMABLE_TIMEOUT: float = 30.0

    # --- Visibility ---
    # Elevated roles also see expired videos when enabled.
    ADMIN_SEES_EXPIRED: bool = False

    # --- Bootstrap ---
    # Seeded into access_codes on startup while the table is empty.
    BOOTSTRAP_ADMIN_CODE: str | None = None
    BOOTSTRAP_ADMIN_ROLE: str = "main_admin"

    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
