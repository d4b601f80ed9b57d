from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


def _config_files() -> list[Path]:
    # Re-evaluated per call so a changed HOME is honoured
    return [
        Path.home() / ".config/woerter/config.toml",
        Path.home() / ".woerter.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for woerter.
    Supports loading from:
    1. Environment variables (WOERTER_*)
    2. Config file (~/.config/woerter/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="WOERTER_",
        extra="ignore",
    )

    # Paths
    state_file: Path = Field(
        default_factory=lambda: Path.home() / ".config/woerter/state.json"
    )

    # Storage
    backend: Literal["json", "memory"] = "json"

    # Queries
    upcoming_days: int = Field(default=7, ge=0)
    due_limit: int | None = Field(default=None, ge=1)

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = None
        for f in _config_files():
            if f.exists():
                toml_file = f
                break

        # Earlier sources win: CLI overrides, then env, then the TOML file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("state_file", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/woerter/config.toml (if exists)
    3. Environment variables (WOERTER_*)
    4. cli_overrides (passed from Typer); None values are ignored
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
