"""
Manages loading, validation, and saving of the optional INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from mediafetch.exceptions import ConfigurationError
from mediafetch.models.config import FetchConfig

log = logging.getLogger(__name__)

SECTION = "DEFAULT"
_LIST_KEYS = {"captcha_hosts"}


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        # Interpolation would mangle '%' in rate-limit patterns.
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> FetchConfig:
        """
        Loads configuration from the INI file (if present), applies CLI
        overrides, and validates it.

        Args:
            cli_options: Options provided via the command line. None values
                are treated as "not given".

        Returns:
            A validated FetchConfig object.

        Raises:
            ConfigurationError: If the file cannot be parsed or validation fails.
        """
        settings = self._read_file()
        unknown = set(settings) - FetchConfig.get_ini_keys()
        for key in sorted(unknown):
            log.warning(f"[yellow]Ignoring unknown config key '{key}'[/yellow]")
            del settings[key]

        if cli_options:
            settings.update({k: v for k, v in cli_options.items() if v is not None})

        try:
            return FetchConfig(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any]) -> None:
        """
        Writes a complete configuration file: the given settings plus the
        model defaults for everything else.
        """
        try:
            config = FetchConfig(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

        parser = configparser.ConfigParser(interpolation=None)
        parser[SECTION] = {}
        for key in sorted(FetchConfig.get_ini_keys()):
            value = getattr(config, key)
            if isinstance(value, bool):
                parser[SECTION][key] = "true" if value else "false"
            elif isinstance(value, list):
                parser[SECTION][key] = ",".join(map(str, value))
            elif value is None:
                parser[SECTION][key] = ""
            else:
                parser[SECTION][key] = str(value)

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                parser.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e
        log.debug(f"Saved configuration to '{self.config_file_path}'")

    def _read_file(self) -> dict[str, Any]:
        """Reads the DEFAULT section; empty values mean "use the default"."""
        if not self.config_file_path.is_file():
            log.debug(f"No config file at '{self.config_file_path}', using defaults")
            return {}
        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        settings: dict[str, Any] = {}
        for key, raw in self._parser[SECTION].items():
            value = raw.strip()
            if not value:
                continue
            if key in _LIST_KEYS:
                settings[key] = [s.strip() for s in value.split(",") if s.strip()]
            else:
                settings[key] = value
        return settings
