"""
Runtime settings for rulebound.

Values come from RULEBOUND_* environment variables, optionally loaded from a
.env file with python-dotenv.
"""
import os
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "RULEBOUND_"


class Settings(BaseModel):
    """
    Settings shared by the logger, the connection pool and the CLI.

    Attributes:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_format: "json" for structured logs, "text" for local development
        db_host / db_port / db_name / db_user / db_password: PostgreSQL connection
        pool_min_size / pool_max_size: Connection pool bounds
        db_timeout: Connection timeout in seconds
    """

    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"
    db_host: str = "localhost"
    db_port: int = Field(5432, gt=0)
    db_name: str = "rulebound"
    db_user: str = "rulebound"
    db_password: str | None = None
    pool_min_size: int = Field(1, ge=0)
    pool_max_size: int = Field(5, ge=1)
    db_timeout: float = Field(30.0, gt=0)

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "Settings":
        """
        Build settings from the environment.

        Args:
            env_file: Optional .env path (python-dotenv searches upwards when None)

        Returns:
            Settings instance
        """
        load_dotenv(env_file)

        values = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None:
                values[name] = raw
        return cls(**values)


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() re-reads the environment."""
    global _settings
    _settings = None
