"""
Build orchestration for gdforge projects.

This module turns a platform target and build profile into the external
tool invocations that clean, build and export a project:
- Local: cargo and the Godot editor run directly on the host
- Cross: cargo and a headless Godot run inside the cross-compiler image

The strategy is chosen once per orchestrator from the project
configuration and never changes afterwards.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from ..config.build_profile import BuildProfile
from ..config.ini_parser import ProjectConfiguration
from ..config.platform_target import PlatformTarget, current_platform
from ..errors import FilesystemError
from .artifact_paths import GODOT_DIR, ArtifactPaths
from .artifact_relocator import ArtifactRelocator
from .container import ContainerInvocation, Glob, ShellArg
from .manifest import get_package_name
from .process_runner import ProcessRunner
from .sdk_probe import SdkProbe, cross_environment

logger = logging.getLogger(__name__)

CARGO_EXE = "cargo"
CONTAINER_GODOT_EXE = "godot_headless"
IMPORT_CACHE_DIR = f"{GODOT_DIR}/.import"


def engine_for_export(config: ProjectConfiguration, host: PlatformTarget) -> str:
    """Pick the Godot executable used for exporting on this host.

    Linux desktop hosts export with the headless build; every other host
    uses the regular editor binary.
    """
    if host.is_linux_desktop:
        return config.godot_headless_executable
    return config.godot_executable


def cargo_build_args(target: PlatformTarget, profile: BuildProfile) -> List[str]:
    """cargo build arguments; the profile flag is omitted for Debug."""
    return [CARGO_EXE, "build", "--target", target.triple, *profile.compiler_args()]


class BuildOrchestrator(ABC):
    """
    Cleans, builds and exports a project for one target and profile.

    Example usage:
        orchestrator = create_orchestrator(config, PlatformTarget.LINUX_X86_64,
                                           BuildProfile.DEBUG, Path("."))
        orchestrator.clean()
        library = orchestrator.build()
        game = orchestrator.export()
    """

    strategy = "base"

    def __init__(
        self,
        target: PlatformTarget,
        profile: BuildProfile,
        config: ProjectConfiguration,
        project_dir: Path,
        runner: Optional[ProcessRunner] = None,
    ):
        """
        Initialize build orchestrator.

        Args:
            target: Platform to build for
            profile: Debug or release
            config: Resolved project configuration
            project_dir: Project root; also the working directory of cargo
            runner: Process runner (a new ProcessRunner if omitted)
        """
        self.target = target
        self.profile = profile
        self.config = config
        self.project_dir = Path(project_dir)
        self.runner = runner or ProcessRunner()

    def artifact_paths(self) -> ArtifactPaths:
        """
        Derive artifact paths, reading the package name from the manifest.

        Raises:
            ManifestError: If rust/Cargo.toml cannot be read
            MissingPackageNameError: If it declares no package name
        """
        return ArtifactPaths(self.target, self.profile, get_package_name(self.project_dir))

    @abstractmethod
    def clean(self) -> None:
        """Remove build artifacts."""
        ...

    @abstractmethod
    def build(self) -> Path:
        """
        Compile the library and stage it under lib/{triple}.

        Returns:
            Path of the staged library
        """
        ...

    @abstractmethod
    def export(self) -> Path:
        """
        Export the game with the matching export preset.

        Returns:
            Path of the exported binary or package
        """
        ...


class LocalOrchestrator(BuildOrchestrator):
    """Runs cargo and Godot directly on the host."""

    strategy = "local"

    def __init__(self, *args, relocator: Optional[ArtifactRelocator] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.relocator = relocator or ArtifactRelocator()

    def clean(self) -> None:
        self.runner.run([CARGO_EXE, "clean"], cwd=self.project_dir)

    def build(self) -> Path:
        paths = self.artifact_paths()

        self.runner.run(cargo_build_args(self.target, self.profile), cwd=self.project_dir)

        return self.relocator.relocate(
            self.project_dir / paths.native_output,
            self.project_dir / paths.staged_library,
        )

    def export(self) -> Path:
        paths = self.artifact_paths()
        engine = engine_for_export(self.config, current_platform())

        output = self.project_dir / paths.export_output
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(output.parent, e) from e

        self.runner.run(
            [engine, self.profile.export_flag, paths.export_preset, paths.export_output_from_godot],
            cwd=self.project_dir / GODOT_DIR,
        )
        return output


class CrossOrchestrator(BuildOrchestrator):
    """Runs cargo and a headless Godot inside the cross-compiler image."""

    strategy = "cross"

    def __init__(self, *args, probe: Optional[SdkProbe] = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.probe = probe or SdkProbe(self.runner)

    def _invoke(self, steps: List[List[ShellArg]], env: Optional[dict] = None) -> None:
        invocation = ContainerInvocation(
            steps=steps,
            mount_source=self.project_dir.resolve(),
            env=env or {},
        )
        self.runner.run(invocation.argv(), cwd=self.project_dir)

    def clean(self) -> None:
        self._invoke([[CARGO_EXE, "clean"], ["rm", "-rf", IMPORT_CACHE_DIR]])

    def build(self) -> Path:
        paths = self.artifact_paths()
        env = cross_environment(self.target, self.probe)
        library_dir = paths.library_dir.as_posix()

        self._invoke(
            [
                cargo_build_args(self.target, self.profile),
                ["mkdir", "-p", library_dir],
                ["mv", "-b", Glob(paths.native_output_glob), library_dir],
            ],
            env=env,
        )
        return self.project_dir / paths.staged_library

    def export(self) -> Path:
        paths = self.artifact_paths()

        self._invoke(
            [
                ["mkdir", "-p", paths.export_output.parent.as_posix()],
                ["cd", GODOT_DIR],
                [
                    CONTAINER_GODOT_EXE,
                    self.profile.export_flag,
                    paths.export_preset,
                    paths.export_output_from_godot,
                ],
            ]
        )
        return self.project_dir / paths.export_output


def create_orchestrator(
    config: ProjectConfiguration,
    target: PlatformTarget,
    profile: BuildProfile,
    project_dir: Path,
    runner: Optional[ProcessRunner] = None,
) -> BuildOrchestrator:
    """
    Select the build strategy for a configuration.

    Args:
        config: Project configuration; its cross-compilation switch decides
        target: Platform to build for
        profile: Debug or release
        project_dir: Project root
        runner: Process runner shared by the orchestrator's steps

    Returns:
        CrossOrchestrator when cross-compilation is enabled, else LocalOrchestrator
    """
    cls = CrossOrchestrator if config.enable_cross_compilation else LocalOrchestrator
    logger.debug("Using %s strategy for %s (%s)", cls.strategy, target.triple, profile)
    return cls(target, profile, config, project_dir, runner=runner)
