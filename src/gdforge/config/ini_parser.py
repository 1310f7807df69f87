"""
.gdforge configuration parser.

This module reads the optional per-project .gdforge file, which overrides
the engine executables and turns cross-compilation on or off.
"""

import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import ConfigurationError

CONFIG_FILE_NAME = ".gdforge"
SECTION = "gdforge"

GODOT_EXE = "godot"
GODOT_HEADLESS_EXE = "godot-headless"
GODOT_SERVER_EXE = "godot-server"


@dataclass(frozen=True)
class ProjectConfiguration:
    """Resolved executables and cross-compilation switch for a project."""

    godot_executable: str = GODOT_EXE
    godot_headless_executable: str = GODOT_HEADLESS_EXE
    godot_server_executable: str = GODOT_SERVER_EXE
    enable_cross_compilation: bool = False


class ProjectConfigLoader:
    """
    Loader for .gdforge configuration files.

    Example .gdforge:
        [gdforge]
        godot-exe = /opt/godot/godot
        godot-headless-exe = /opt/godot/godot-headless
        godot-server-exe = /opt/godot/godot-server
        enable-cross-compilation = true

    Every key is optional. A missing file or section yields the defaults.

    Usage:
        config = ProjectConfigLoader(Path(".gdforge")).load()
        if config.enable_cross_compilation:
            ...
    """

    KEY_DEFAULTS = {
        "godot-exe": GODOT_EXE,
        "godot-headless-exe": GODOT_HEADLESS_EXE,
        "godot-server-exe": GODOT_SERVER_EXE,
        "enable-cross-compilation": "false",
    }

    def __init__(self, ini_path: Path):
        """
        Initialize the loader.

        Args:
            ini_path: Path to the .gdforge file (need not exist)
        """
        self.ini_path = ini_path

    @classmethod
    def for_project(cls, project_dir: Path) -> "ProjectConfigLoader":
        return cls(Path(project_dir) / CONFIG_FILE_NAME)

    def load(self) -> ProjectConfiguration:
        """
        Read the configuration file.

        Returns:
            ProjectConfiguration with defaults for anything not set

        Raises:
            ConfigurationError: If the file exists but cannot be read or parsed
        """
        parser = configparser.ConfigParser(interpolation=None)

        if self.ini_path.exists():
            try:
                with open(self.ini_path, encoding="utf-8") as f:
                    parser.read_file(f, source=str(self.ini_path))
            except (configparser.Error, UnicodeDecodeError, OSError) as e:
                raise ConfigurationError(f"Failed to parse {self.ini_path}: {e}") from e

        values = {key: self._get(parser, key) for key in self.KEY_DEFAULTS}

        return ProjectConfiguration(
            godot_executable=values["godot-exe"],
            godot_headless_executable=values["godot-headless-exe"],
            godot_server_executable=values["godot-server-exe"],
            enable_cross_compilation=values["enable-cross-compilation"].lower() == "true",
        )

    def _get(self, parser: configparser.ConfigParser, key: str) -> str:
        value: Optional[str] = None
        if parser.has_section(SECTION):
            value = parser[SECTION].get(key)
        if value is None or not value.strip():
            value = self.KEY_DEFAULTS[key]
        # Windows paths are passed to the engine with forward slashes
        return value.strip().replace("\\", "/")


def load_configuration(project_dir: Path) -> ProjectConfiguration:
    """Load the .gdforge configuration for a project directory."""
    return ProjectConfigLoader.for_project(project_dir).load()
