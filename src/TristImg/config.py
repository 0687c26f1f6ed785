# -*- coding: utf-8 -*-
"""
TristImg.config
===============

Settings for the ``tristimg`` command line.

Values are layered, later layers winning:

1) defaults of :class:`Settings`
2) the ``[tristimg]`` table of an optional TOML file, e.g.::

       [tristimg]
       log_level = "DEBUG"
       data_file_padding = 6
       extension = "h5"
       log_file = "tristimg.log"

3) environment variables ``LOG_LEVEL``, ``DATA_FILE_PADDING`` and
   ``TRISTIMG_LOG_FILE``

Command line arguments are applied on top by :mod:`TristImg.cli`. The
library modules never read these settings themselves.
"""
import logging
import os
import tomllib
from dataclasses import dataclass, fields, replace
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_ENV = "TRISTIMG_CONFIG"

# Environment variable -> Settings field
ENV_VARS = {
    "LOG_LEVEL": "log_level",
    "DATA_FILE_PADDING": "data_file_padding",
    "TRISTIMG_LOG_FILE": "log_file",
}

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    data_file_padding: int = 6
    extension: str = "h5"
    log_file: Optional[str] = None


def _read_toml(path):
    with open(path, "rb") as f:
        return tomllib.load(f)


def _coerce(name, value):
    """Validate one setting value and convert it to the field's type."""
    if name == "log_level":
        level = str(value).upper()
        if level not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level '{value}', expected one of {LOG_LEVELS}")
        return level

    if name == "data_file_padding":
        # int or decimal string only, no bool or float
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ConfigError(
                f"data_file_padding must be an integer, got {value!r}")
        try:
            padding = int(value)
        except ValueError:
            raise ConfigError(
                f"data_file_padding must be an integer, got '{value}'"
                ) from None
        if padding < 0:
            raise ConfigError(
                f"data_file_padding must be >= 0, got {padding}")
        return padding

    if name == "extension":
        return str(value).lstrip(".")

    if name == "log_file":
        return None if value in (None, "") else str(value)

    raise ConfigError(f"Unknown setting '{name}'")


def load_settings(config_path=None, environ=None):
    """
    Build :class:`Settings` from defaults, a TOML file and the environment.

    Parameters
    ----------
    config_path : str or None, optional
        TOML settings file. If None, ``$TRISTIMG_CONFIG`` is used when set.
    environ : mapping or None, optional
        Environment to read. Defaults to ``os.environ``.

    Returns
    -------
    Settings

    Raises
    ------
    ConfigError
        If the TOML file is missing or malformed, or a value is invalid.
    """
    if environ is None:
        environ = os.environ

    settings = Settings()
    known = {f.name for f in fields(Settings)}

    if config_path is None:
        config_path = environ.get(CONFIG_ENV) or None

    if config_path is not None:
        try:
            cfg = _read_toml(config_path)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigError(
                f"Cannot read settings file {config_path}: {e}") from e

        table = cfg.get("tristimg", {})
        if not isinstance(table, dict):
            raise ConfigError(
                f"[tristimg] in {config_path} must be a table, "
                f"got {table!r}")
        unknown = set(table) - known
        if unknown:
            raise ConfigError(
                f"Unknown settings in {config_path}: {sorted(unknown)}")
        settings = replace(settings, **{
            k: _coerce(k, v) for k, v in table.items()})
        logger.debug(f"Loaded settings from {config_path}")

    overrides = {
        field: _coerce(field, environ[var])
        for var, field in ENV_VARS.items() if var in environ}
    return replace(settings, **overrides)
