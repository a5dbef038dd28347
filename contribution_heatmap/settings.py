from typing import Literal

from pydantic import AliasChoices
from pydantic import Field
from pydantic import HttpUrl
from pydantic import ValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


DEFAULT_USERNAMES = "migaradenuwan,MigaraDenuwan-Tokyo"


class ConfigError(Exception):
    """Raised when environment configuration cannot be used for a run."""


class Settings(BaseSettings):
    """Run settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    Empty variables are treated as unset.
    """

    github_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GH_PAT", "GH_TOKEN", "GITHUB_TOKEN"),
    )
    usernames: str = DEFAULT_USERNAMES
    days: int = Field(default=365, gt=0)
    cell_size: int = Field(default=12, gt=0)
    gap: int = Field(default=3, ge=0)
    github_graphql_url: HttpUrl = HttpUrl("https://api.github.com/graphql")
    request_timeout_seconds: float = Field(default=20.0, gt=0)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        env_ignore_empty=True,
        populate_by_name=True,
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        """Accept log level names in any case."""

        return value.upper() if isinstance(value, str) else value

    @property
    def accounts(self) -> list[str]:
        """Account logins parsed from the comma-separated `usernames` value."""

        return [name.strip() for name in self.usernames.split(",") if name.strip()]


def load_settings(**overrides: object) -> Settings:
    """Build settings once at process start.

    Raises:
        ConfigError: If any value fails validation.
    """

    try:
        return Settings(**overrides)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'settings'}: {error['msg']}"
            for error in exc.errors()
        )
        raise ConfigError(f"invalid configuration: {problems}") from exc
