"""Configuration for lua2bind

Settings come from defaults, then an optional YAML file, then CLI flags.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_NAMESPACE = "GeneratedLua"
DEFAULT_LUA_DIRECTORY = ""
DEFAULT_OUTPUT_DIR = "."
CONFIG_SECTION = "lua2bind"


class ConfigError(ValueError):
    """Raised when a configuration file cannot be used"""


@dataclass
class BinderConfig:
    """Generation settings

    Attributes:
        namespace: C++ namespace for generated classes
        lua_directory: Only .lua files under this directory are processed (empty = all)
        output_dir: Directory generated headers are written to
        check_syntax: Run luaparser over each file and report syntax errors
    """
    namespace: str = DEFAULT_NAMESPACE
    lua_directory: str = DEFAULT_LUA_DIRECTORY
    output_dir: str = DEFAULT_OUTPUT_DIR
    check_syntax: bool = False

    def load_from_yaml(self, path: Path) -> None:
        """Load settings from a YAML config file

        Keys may sit at the top level or under a ``lua2bind:`` mapping.
        Blank values leave the current setting untouched; a missing file
        is ignored.

        Args:
            path: Path to YAML config file

        Raises:
            ConfigError: If the file is not valid YAML or not a mapping
        """
        if not path.exists():
            return

        with open(path, 'r', encoding='utf-8') as f:
            try:
                config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}")

        if config is None:
            return
        if not isinstance(config, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        section = config.get(CONFIG_SECTION, config)
        if not isinstance(section, dict):
            raise ConfigError(f"'{CONFIG_SECTION}' in {path} must be a mapping")

        self.apply(section)

    def apply(self, values: Dict[str, Any]) -> None:
        """Apply non-blank values over the current settings

        Args:
            values: Mapping of setting name to value (unknown keys are ignored)
        """
        for key in ("namespace", "lua_directory", "output_dir"):
            value = values.get(key)
            if value is not None and str(value).strip():
                setattr(self, key, str(value).strip())

        if values.get("check_syntax") is not None:
            self.check_syntax = bool(values["check_syntax"])

    @classmethod
    def from_sources(cls, config_file: Optional[Path] = None,
                     overrides: Optional[Dict[str, Any]] = None) -> 'BinderConfig':
        """Build a config from defaults, a YAML file and CLI overrides

        Args:
            config_file: Optional YAML config path
            overrides: Optional values that take precedence over the file

        Returns:
            Populated BinderConfig
        """
        config = cls()
        if config_file is not None:
            config.load_from_yaml(config_file)
        if overrides:
            config.apply(overrides)
        return config
