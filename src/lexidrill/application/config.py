from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from lexidrill.domain.constants import (
    COMMENT_MARKER,
    DEFAULT_DECK,
    DEFAULT_DECKS,
    DEFAULT_MIN_ITEMS,
    KOCH_START_SIZE,
    KOCH_THRESHOLD,
    KOCH_WINDOW,
    REVEAL_DELAY,
    SEPARATOR,
)
from lexidrill.domain.models import Direction
from lexidrill.domain.unlock import UnlockPolicy


def config_file() -> Path:
    return Path.home() / ".config/lexidrill/config.toml"


class AppConfig(BaseSettings):
    """
    Configuration model for lexidrill.
    Supports loading from:
    1. Config file (~/.config/lexidrill/config.toml)
    2. Environment variables (LEXIDRILL_*)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="LEXIDRILL_",
        extra="ignore",
    )

    # Paths
    state_dir: Path = Field(default_factory=lambda: Path.home() / ".config/lexidrill/state")
    deck_base: str = "."

    # Catalog
    decks: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_DECKS))
    default_deck: str = DEFAULT_DECK

    # Source format
    separator: str = SEPARATOR
    comment_marker: str = COMMENT_MARKER
    min_items: int = Field(default=DEFAULT_MIN_ITEMS, ge=1)
    direction: Direction = Direction.REVERSE

    # Scheduling
    strategy: Literal["koch", "weighted"] = "koch"
    window_size: int = Field(default=KOCH_WINDOW, ge=1)
    threshold: float = Field(default=KOCH_THRESHOLD, gt=0, le=1)
    start_size: int = Field(default=KOCH_START_SIZE, ge=1)
    reset_window_on_advance: bool = False
    reset_on_switch: bool = True
    seed: int | None = None

    # Timing (seconds)
    reveal_delay: float = Field(default=REVEAL_DELAY, gt=0)
    auto_advance: float | None = None

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

        # Earlier sources win: CLI overrides, then env, then the TOML file.
        toml_file = config_file()
        if toml_file.exists():
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("state_dir", mode="before")
    @classmethod
    def resolve_state_dir(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @field_validator("separator", "comment_marker")
    @classmethod
    def non_empty_marker(cls, v: str) -> str:
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("decks")
    @classmethod
    def plain_deck_names(cls, v: dict[str, str]) -> dict[str, str]:
        # Names become part of deck ids such as "sv:reverse".
        for name in v:
            if not name or ":" in name:
                raise ValueError(f"deck name '{name}' must be non-empty and must not contain ':'")
        return v

    @field_validator("auto_advance")
    @classmethod
    def positive_auto_advance(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            return None
        return v

    def unlock_policy(self) -> UnlockPolicy:
        return UnlockPolicy(
            window_size=self.window_size,
            threshold=self.threshold,
            start_size=self.start_size,
            reset_window_on_advance=self.reset_window_on_advance,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/lexidrill/config.toml (if exists)
    3. Environment variables (LEXIDRILL_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes every option; unset ones arrive as None and must not mask lower layers.
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
