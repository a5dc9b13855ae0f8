"""Process configuration loaded from environment variables.

Everything here is read once at startup. Missing or invalid values are
fatal: ``load_settings`` raises ``StartupError`` and the entry point decides
to abort.
"""

from typing import Literal, Optional

from pydantic import Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from zkp.kzg4844.blob import INT64_MIN, INT64_MAX
from zkp.kzg4844.errors import StartupError


class Settings(BaseSettings):
    """Challenge service settings."""

    model_config = SettingsConfigDict(extra="ignore")

    # Secrets
    flag: str = Field(alias="FLAG", min_length=1)
    admin_seed: int = Field(alias="ADMIN_SEED", ge=INT64_MIN, le=INT64_MAX)

    # HTTP server
    host: str = Field(default="0.0.0.0", alias="HOST")
    port: int = Field(default=13337, alias="PORT", ge=1, le=65535)

    # KZG backend
    kzg_backend: Literal["ckzg", "seeded"] = Field(default="ckzg", alias="KZG_BACKEND")
    trusted_setup_path: Optional[str] = Field(default=None, alias="KZG_TRUSTED_SETUP")
    kzg_precompute: int = Field(default=0, alias="KZG_PRECOMPUTE", ge=0, le=15)
    kzg_setup_seed: int = Field(default=1337, alias="KZG_SETUP_SEED")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _require_trusted_setup(self):
        if self.kzg_backend == "ckzg" and not self.trusted_setup_path:
            raise ValueError("KZG_TRUSTED_SETUP is required for the ckzg backend")
        return self

    def __repr__(self):
        return (
            f"Settings(host={self.host!r}, port={self.port}, "
            f"kzg_backend={self.kzg_backend!r})"
        )


def load_settings(**overrides):
    """Read settings from the environment.

    Keyword overrides use the environment variable names, e.g.
    ``load_settings(PORT=8080)``.

    Raises:
        StartupError: a required variable is missing or invalid
    """
    try:
        return Settings(**overrides)
    except ValidationError as exc:
        # error["input"] may carry FLAG, so only locations and messages are kept
        problems = "; ".join(
            "{}: {}".format(
                ".".join(str(part) for part in error["loc"]) or "settings",
                error["msg"],
            )
            for error in exc.errors()
        )
        raise StartupError(f"invalid configuration: {problems}") from exc
