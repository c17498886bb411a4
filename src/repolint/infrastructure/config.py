"""Application configuration — loaded from environment variables and CLI overrides."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import AliasChoices, Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from repolint.domain.exceptions import ConfigurationError

TOKEN_FILE = Path("token")


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_prefix="REPOLINT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    account: str
    token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("token", "github_token", "repolint_token"),
    )
    host: str = "github.com"
    api_url: str = "https://api.github.com"
    raw_url: str = "https://raw.githubusercontent.com"
    per_page: int = Field(default=100, ge=1, le=100)

    min_stars: int = Field(default=0, ge=0)
    skip_forks: bool = True
    skip_archived: bool = True
    skip_inactive: bool = True
    skip_vendor: bool = True
    inactivity_months: int = Field(default=6, ge=1)
    disabled_checkers: str = ""

    verbose: bool = False
    http_timeout: float = Field(default=30.0, gt=0)
    link_check_timeout: int = Field(default=30, ge=1)
    tool_timeout: float = Field(default=300.0, gt=0)
    max_concurrency: int = Field(default=8, ge=1)
    misspell_bin: str = "misspell"
    liche_bin: str = "liche"

    @field_validator("account")
    @classmethod
    def _account_not_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "account must not be empty."
            raise ValueError(msg)
        return stripped

    @property
    def disabled_checker_names(self) -> list[str]:
        """Names listed in ``disabled_checkers``, in order, without blanks."""
        return [name.strip() for name in self.disabled_checkers.split(",") if name.strip()]

    def token_value(self) -> str:
        if self.token is None:
            raise ConfigurationError(
                "No API token: set the TOKEN environment variable or create a ./token file."
            )
        return self.token.get_secret_value()


def load_settings(token_file: Path = TOKEN_FILE, **overrides: Any) -> Settings:
    """Build :class:`Settings` from the environment plus explicit *overrides*.

    When no token is configured anywhere, the contents of *token_file* are used.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        settings = Settings(**values)
    except ValidationError as exc:
        messages = []
        for err in exc.errors():
            loc = ".".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        raise ConfigurationError("; ".join(messages)) from exc

    if settings.token is None and token_file.is_file():
        token = token_file.read_text(encoding="utf-8").strip()
        if token:
            settings = settings.model_copy(update={"token": SecretStr(token)})
    return settings
