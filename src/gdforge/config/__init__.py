"""Configuration and platform definitions for gdforge."""

from .build_profile import BuildProfile
from .ini_parser import (
    CONFIG_FILE_NAME,
    ProjectConfigLoader,
    ProjectConfiguration,
    load_configuration,
)
from .machine_type import MachineType
from .platform_target import (
    TARGET_SPECS,
    PlatformTarget,
    TargetSpec,
    current_platform,
    current_platform_identifier,
    known_identifiers,
    parse_target_list,
)

__all__ = [
    "BuildProfile",
    "CONFIG_FILE_NAME",
    "MachineType",
    "PlatformTarget",
    "ProjectConfigLoader",
    "ProjectConfiguration",
    "TARGET_SPECS",
    "TargetSpec",
    "current_platform",
    "current_platform_identifier",
    "known_identifiers",
    "load_configuration",
    "parse_target_list",
]
