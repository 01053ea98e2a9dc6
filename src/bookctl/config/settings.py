"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``BOOKCTL_*`` prefix, ``__`` for nested sections
  3. TOML file    — ``bookctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Relative directories in any layer are resolved against ``project_root``.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from bookctl.config.discovery import find_config
from bookctl.config.models import BuildConfig, GraphvizConfig, LatexConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``bookctl.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path has to reach settings_customise_sources, which is a classmethod.
_tls = threading.local()


class BookSettings(BaseSettings):
    """Settings for one bookctl invocation.

    Attributes:
        project_root: Directory relative paths are resolved against (parent
            of ``bookctl.toml``, or CWD if no config found).
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "BOOKCTL_",
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
    latex: LatexConfig = Field(default_factory=LatexConfig)
    graphviz: GraphvizConfig = Field(default_factory=GraphvizConfig)
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
        **cli_flags: Any,
    ) -> BookSettings:
        """Construct settings from a CLI invocation.

        Discovers ``bookctl.toml`` via walk-up (or explicit *config_path*),
        takes *project_root* from the config file's parent directory, and
        merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    # --- Resolved directories ---

    def resolve(self, path: Path) -> Path:
        """Anchor a configured path at the project root unless absolute."""
        return path if path.is_absolute() else self.project_root / path

    @property
    def target_dir(self) -> Path:
        return self.resolve(self.build.target_directory)

    @property
    def images_dir(self) -> Path:
        return self.resolve(self.build.images_directory)

    @property
    def source_root(self) -> Path:
        return self.resolve(self.build.source_root)

    @property
    def latex_dir(self) -> Path:
        return self.resolve(self.latex.directory)

    @property
    def graphviz_dir(self) -> Path:
        return self.resolve(self.graphviz.directory)
