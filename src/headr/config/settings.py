"""HeadrSettings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``HEADR_*`` prefix
  3. TOML file    — ``headr.toml`` discovered via walk-up
  4. Code defaults

The only tunable that reaches the head loop is ``lines``, the line count
used when neither ``--lines`` nor ``--bytes`` is given.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import PositiveInt, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from headr.config.discovery import find_config, load_config
from headr.domain.limits import DEFAULT_LINES


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``headr.toml`` file via :func:`load_config`."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = load_config(toml_path)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, False

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class HeadrSettings(BaseSettings):
    """Unified settings for a headr run, frozen after construction.

    Attributes:
        lines: Default line count when ``-n`` is omitted.
        verbose: Emit debug logs to stderr.
        log_json: Render logs as JSON lines.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "HEADR_",
        "extra": "ignore",
    }

    lines: PositiveInt = DEFAULT_LINES
    verbose: bool = False
    log_json: bool = False
    config_path: Path | None = None

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
        start: Path | None = None,
        **cli_flags: Any,
    ) -> HeadrSettings:
        """Construct settings from a CLI invocation.

        Uses *config_path* when given, otherwise discovers ``headr.toml``
        by walking up from *start* (default: cwd). *cli_flags* override
        every other source.

        Raises:
            click.ClickException: The config file is missing, is not valid
                TOML, or holds invalid values.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path)
            if not toml_path.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        except ValidationError as exc:
            source = toml_path or "environment"
            msg = f"Invalid configuration in {source}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None
