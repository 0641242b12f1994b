from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


def config_files() -> list[Path]:
    return [
        Path.home() / ".config/vindicate/config.toml",
        Path.home() / ".vindicate.toml",
    ]


class AppConfig(BaseSettings):
    """
    Configuration model for vindicate.
    Supports loading from:
    1. Environment variables (VINDICATE_*)
    2. Config file (~/.config/vindicate/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="VINDICATE_",
        extra="ignore",
    )

    # Paths
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".config/vindicate/data")
    deck_path: Path | None = None

    # Identity used to namespace stored progress, settings and ratings
    user: str | None = None

    # Storage backend: "file" persists under data_dir, "memory" forgets on exit
    storage: Literal["file", "memory"] = "file"

    # Fixed seed for reproducible queue order (None = random)
    seed: int | None = None

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

        # First existing file wins
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("data_dir", mode="before")
    @classmethod
    def resolve_dir(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("deck_path", mode="before")
    @classmethod
    def resolve_deck_path(cls, v: Any) -> Path | None:
        if v:
            return Path(v).expanduser().resolve()
        return None


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/vindicate/config.toml (if exists)
    3. Environment variables (VINDICATE_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
