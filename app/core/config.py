from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Global application configuration.

    Values are loaded from environment variables at runtime.

    These settings are used for:
    - DB connection (role store)
    - Agent API key
    - Plan limits
    - Hourly rate table overrides
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    APP_NAME: str = "MeetingFlow"
    APP_ENV: str = Field("local", description="Environment name: local/test/dev/stage/prod")
    LOG_LEVEL: str = Field("INFO", description="Minimum log level for the service.")

    DB_URL: str = Field(
        "sqlite+aiosqlite:///./meetingflow.db",
        description="SQLAlchemy-compatible database URL",
    )

    AGENT_API_KEY: str | None = Field(
        default=None,
        description="API key required for hitting /agent endpoints.",
    )

    # --- Plans ---
    PRO_USERS: str | None = Field(
        default=None,
        description="Comma-separated list of user emails on the pro plan.",
    )
    FREE_PLAN_MAX_DAYS: int = Field(
        default=30,
        description="Largest reporting window (in days) for free-plan users.",
    )
    PRO_PLAN_MAX_DAYS: int = Field(
        default=90,
        description="Largest reporting window (in days) for pro-plan users.",
    )

    # --- Rate table ---
    DEFAULT_ROLE: str = Field(
        default="engineer",
        description="Role whose hourly rate is used for unknown or unassigned attendees.",
    )
    HOURLY_RATE_OVERRIDES: dict[str, float] = Field(
        default_factory=dict,
        description=(
            "JSON object of role -> hourly rate merged over the built-in rate table, "
            'e.g. {"engineer": 80, "contractor": 45}.'
        ),
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Cached accessor for application settings.

    Using LRU cache ensures settings are read and validated only once,
    while still being easily importable across the app.
    """
    return Settings()
