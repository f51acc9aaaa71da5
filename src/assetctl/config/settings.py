"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``ASSETCTL_*`` prefix
  3. TOML file    — ``assetctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

The resulting object is frozen: the path registry and every other
section are read-only for the lifetime of the process.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from assetctl.config.discovery import find_config
from assetctl.config.models import (
    BuildConfig,
    ImagesConfig,
    LessConfig,
    NotifierConfig,
    OutputConfig,
    PathRegistry,
    ScriptsConfig,
    ServerConfig,
    ZipConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from an ``assetctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                import click

                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class AssetSettings(BaseSettings):
    """Unified settings for the assetctl CLI.

    Attributes:
        project_root: Resolved project directory (parent of ``assetctl.toml``,
            or CWD if no config found). Every relative path in the config
            is resolved against it.
        config_path: The TOML file in use, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ASSETCTL_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    paths: PathRegistry = Field(default_factory=PathRegistry)
    output: OutputConfig = Field(default_factory=OutputConfig)
    scripts: ScriptsConfig = Field(default_factory=ScriptsConfig)
    less: LessConfig = Field(default_factory=LessConfig)
    notifier: NotifierConfig = Field(default_factory=NotifierConfig)
    images: ImagesConfig = Field(default_factory=ImagesConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    zip: ZipConfig = Field(default_factory=ZipConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        jobs: int | None = None,
        **cli_flags: Any,
    ) -> AssetSettings:
        """Construct settings from a CLI invocation.

        Discovers ``assetctl.toml`` via walk-up (or explicit *config_path*),
        resolves *project_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                import click

                raise click.ClickException(f"Config file not found: {config_path}")
            toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            settings = cls(
                project_root=resolved_root.resolve(),
                config_path=toml_path,
                **cli_flags,
            )
        except ValidationError as exc:
            import click

            raise click.ClickException(f"Invalid configuration: {exc}") from exc
        finally:
            _tls.toml_path = None

        if jobs is not None:
            build = settings.build.model_copy(update={"jobs": jobs})
            settings = settings.model_copy(update={"build": build})
        return settings
