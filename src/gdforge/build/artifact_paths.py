"""
Canonical artifact locations.

All paths are relative to the project root and are pure functions of
(target, profile, package name), so repeated builds always stage to the
same place.
"""

from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from ..config.build_profile import BuildProfile
from ..config.platform_target import PlatformTarget

CARGO_TARGET_DIR = "target"
LIB_DIR = "lib"
BIN_DIR = "bin"
GODOT_DIR = "godot"


@dataclass(frozen=True)
class ArtifactPaths:
    """Derived build and export paths for one target/profile/package."""

    target: PlatformTarget
    profile: BuildProfile
    package_name: str

    @property
    def library_file_name(self) -> str:
        return f"{self.target.library_prefix}{self.package_name}.{self.target.library_extension}"

    @property
    def native_output_dir(self) -> Path:
        """Directory cargo writes to: target/{triple}/{profile}."""
        return Path(CARGO_TARGET_DIR) / self.target.triple / self.profile.value

    @property
    def native_output(self) -> Path:
        return self.native_output_dir / self.library_file_name

    @property
    def native_output_glob(self) -> str:
        """Shell glob matching every library cargo produced for this target."""
        return str(PurePosixPath(self.native_output_dir.as_posix()) / f"*.{self.target.library_extension}")

    @property
    def library_dir(self) -> Path:
        return Path(LIB_DIR) / self.target.triple

    @property
    def staged_library(self) -> Path:
        return self.library_dir / self.library_file_name

    @property
    def export_preset(self) -> str:
        return f"{self.target.export_family_name}.{self.target.triple}.{self.profile.value}"

    @property
    def export_file_name(self) -> str:
        return (
            f"{self.package_name}.{self.profile.value}."
            f"{self.target.triple}{self.target.application_extension}"
        )

    @property
    def export_output(self) -> Path:
        """Exported binary relative to the project root."""
        return Path(BIN_DIR) / self.target.triple / self.export_file_name

    @property
    def export_output_from_godot(self) -> str:
        """Exported binary as the engine sees it from inside godot/."""
        return f"../{BIN_DIR}/{self.target.triple}/{self.export_file_name}"
