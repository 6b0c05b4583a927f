"""Unified settings — keyword overrides, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — overrides passed to :meth:`PreludeSettings.load`
  2. Env vars     — ``PRELUDEKIT_*`` prefix
  3. TOML file    — ``[tool.preludekit]`` in the file named by ``config_path``
                    or PRELUDEKIT_CONFIG (walk-up discovery is opt-in)
  4. Code defaults — baked into the model

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the file helpers from :mod:`preludekit.config.discovery`.
"""

from __future__ import annotations

import functools
import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from preludekit.config.discovery import (
    CONFIG_ENV_VAR,
    TOOL_TABLE,
    env_config_path,
    find_config,
    read_tool_table,
)
from preludekit.errors import ConfigError


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the ``[tool.preludekit]`` table of a pyproject.toml."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            try:
                self._data = read_tool_table(toml_path) or {}
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise ConfigError(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML table for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class PreludeSettings(BaseSettings):
    """Runtime switches for the checks preludekit makes at call time.

    Attributes:
        validate_payloads: Check variant payloads against the row's
            declared types with a strict pydantic ``TypeAdapter``.
        allow_extra_handlers: Let ``match`` accept handlers for labels
            outside the variant's row (logged at debug). When False they
            raise ``UnexpectedHandlerError``.
        verbose: Default for :func:`configure_logging`.
        log_json: Default renderer choice for :func:`configure_logging`.
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="PRELUDEKIT_",
        extra="ignore",
    )

    validate_payloads: bool = True
    allow_extra_handlers: bool = True
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
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        discover: bool = False,
        start: Path | None = None,
        **overrides: Any,
    ) -> PreludeSettings:
        """Construct settings from overrides, env vars and an optional TOML file.

        The file is *config_path* when given, else the one named by
        PRELUDEKIT_CONFIG. Without either, no file is read unless
        *discover* is set, in which case the nearest configured
        pyproject.toml above *start* is used.

        Raises:
            ConfigError: The named file is missing or not valid TOML, or a
                source holds a value the settings reject.
        """
        toml_path = Path(config_path) if config_path else env_config_path()
        if toml_path is None and discover:
            toml_path = find_config(start)
        if toml_path is not None and not toml_path.is_file():
            raise ConfigError(
                f"Config file not found: {toml_path}",
                hint=f"Check the config_path argument or {CONFIG_ENV_VAR}",
            )

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        except ValidationError as exc:
            msg = f"Invalid preludekit settings: {exc.error_count()} error(s)"
            hint = f"Fix [tool.{TOOL_TABLE}] in {toml_path}" if toml_path else "Check PRELUDEKIT_* env vars"
            raise ConfigError(msg, hint=hint) from exc
        finally:
            _tls.toml_path = None


@functools.lru_cache(maxsize=1)
def get_settings() -> PreludeSettings:
    """Process-wide settings, loaded on first use from env vars and PRELUDEKIT_CONFIG."""
    return PreludeSettings.load()


def reset_settings() -> None:
    """Drop the cached settings so the next :func:`get_settings` reloads them."""
    get_settings.cache_clear()
