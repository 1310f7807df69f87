"""
Project commands: build, export, clean and run.

Each command fans a request out to one orchestrator per target. Targets
are processed sequentially; every outcome is attributed to its target.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .build.artifact_paths import BIN_DIR, GODOT_DIR, LIB_DIR
from .build.orchestrator import BuildOrchestrator, LocalOrchestrator, create_orchestrator
from .build.process_runner import ProcessRunner
from .config.build_profile import BuildProfile
from .config.ini_parser import ProjectConfiguration
from .config.machine_type import MachineType
from .config.platform_target import PlatformTarget, current_platform
from .errors import GdforgeError, InvalidProjectError, TargetOperationError, UnsupportedTargetError

logger = logging.getLogger(__name__)

PROJECT_FILES = [
    "Cargo.toml",
    "Makefile",
    "godot/default_env.tres",
    "godot/export_presets.cfg",
    "godot/native/game.gdnlib",
    "godot/project.godot",
    "rust/src/lib.rs",
    "rust/Cargo.toml",
]


def validate_project(project_dir: Path) -> None:
    """
    Check that project_dir has the expected gdforge layout.

    Raises:
        InvalidProjectError: Listing every missing file
    """
    expected = list(PROJECT_FILES)
    for target in PlatformTarget:
        expected.append(f"{BIN_DIR}/{target.triple}/.gitkeep")
        expected.append(f"{LIB_DIR}/{target.triple}/.gitkeep")

    missing = [entry for entry in expected if not (Path(project_dir) / entry).exists()]
    if missing:
        raise InvalidProjectError(missing)


@dataclass
class TargetResult:
    """Outcome of one operation for one target."""

    target: PlatformTarget
    operation: str
    success: bool
    output: Optional[Path] = None
    error: Optional[GdforgeError] = None


@dataclass
class CommandReport:
    """Outcome of a (possibly multi-target) command."""

    operation: str
    profile: Optional[BuildProfile] = None
    detail: Optional[str] = None
    results: List[TargetResult] = field(default_factory=list)
    build_time: float = 0.0

    @property
    def success(self) -> bool:
        return all(result.success for result in self.results)

    @property
    def failures(self) -> List[TargetResult]:
        return [result for result in self.results if not result.success]

    @property
    def targets(self) -> List[PlatformTarget]:
        return [result.target for result in self.results]


class ProjectCommands:
    """
    Runs gdforge commands against one project.

    Example usage:
        commands = ProjectCommands(Path("."), load_configuration(Path(".")))
        report = commands.build([PlatformTarget.LINUX_X86_64], BuildProfile.RELEASE)
    """

    def __init__(
        self,
        project_dir: Path,
        config: ProjectConfiguration,
        runner: Optional[ProcessRunner] = None,
        fail_fast: bool = True,
    ):
        """
        Args:
            project_dir: Project root
            config: Resolved configuration (executables, cross-compilation)
            runner: Process runner shared by every orchestrator
            fail_fast: Stop at the first failing target; when False every
                target is attempted and failures are collected in the report
        """
        self.project_dir = Path(project_dir)
        self.config = config
        self.runner = runner or ProcessRunner()
        self.fail_fast = fail_fast

    def orchestrator(self, target: PlatformTarget, profile: BuildProfile) -> BuildOrchestrator:
        return create_orchestrator(self.config, target, profile, self.project_dir, self.runner)

    def build(self, targets: Sequence[PlatformTarget], profile: BuildProfile) -> CommandReport:
        """Build and stage the library for every target."""
        validate_project(self.project_dir)
        return self._for_each("build", targets, profile, lambda orch: orch.build())

    def export(self, targets: Sequence[PlatformTarget], profile: BuildProfile) -> CommandReport:
        """Build, then export the game, for every target."""
        validate_project(self.project_dir)

        def build_and_export(orch: BuildOrchestrator) -> Path:
            orch.build()
            return orch.export()

        return self._for_each("export", targets, profile, build_and_export)

    def clean(self) -> CommandReport:
        """
        Remove build artifacts (and, when cross-compiling, the import cache).

        Raises:
            TargetOperationError: Wrapping the failure, attributed to the host
        """
        start_time = time.time()
        host = current_platform()
        self._on_host(host, "clean", self.orchestrator(host, BuildProfile.default()).clean)
        return CommandReport(
            operation="clean",
            results=[TargetResult(host, "clean", True)],
            build_time=time.time() - start_time,
        )

    def run(self, machine_type: MachineType) -> CommandReport:
        """
        Build the debug library for the host and launch the game.

        Raises:
            InvalidProjectError: If the project layout is incomplete
            TargetOperationError: Wrapping any failure of the run, including
                UnsupportedTargetError for a server run on a host other than
                linux-x86_64
        """
        validate_project(self.project_dir)
        start_time = time.time()
        host = current_platform()

        def build_and_launch() -> None:
            if machine_type is MachineType.SERVER and not host.is_linux_server_capable:
                raise UnsupportedTargetError(
                    host.value, f"Server mode requires a linux-x86_64 host, not {host.value}"
                )

            LocalOrchestrator(
                host, BuildProfile.DEBUG, self.config, self.project_dir, runner=self.runner
            ).build()

            if machine_type is MachineType.SERVER:
                engine = self.config.godot_server_executable
            else:
                engine = self.config.godot_executable

            cmd = [engine, "--path", f"{GODOT_DIR}/"]
            if machine_type.engine_flag:
                cmd.append(machine_type.engine_flag)
            self.runner.run(cmd, cwd=self.project_dir)

        self._on_host(host, "run", build_and_launch)

        return CommandReport(
            operation="run",
            profile=BuildProfile.DEBUG,
            detail=str(machine_type),
            results=[TargetResult(host, "run", True)],
            build_time=time.time() - start_time,
        )

    def _on_host(self, host: PlatformTarget, operation: str, step: Callable[[], None]) -> None:
        try:
            step()
        except GdforgeError as e:
            raise TargetOperationError(host.value, operation, e) from e

    def _for_each(
        self,
        operation: str,
        targets: Sequence[PlatformTarget],
        profile: BuildProfile,
        step: Callable[[BuildOrchestrator], Path],
    ) -> CommandReport:
        start_time = time.time()
        report = CommandReport(operation=operation, profile=profile)

        for target in targets:
            logger.info("%s %s (%s)", operation, target.triple, profile)
            try:
                output = step(self.orchestrator(target, profile))
            except GdforgeError as e:
                failure = TargetOperationError(target.value, operation, e)
                if self.fail_fast:
                    raise failure from e
                logger.error("%s", failure)
                report.results.append(TargetResult(target, operation, False, error=failure))
            else:
                report.results.append(TargetResult(target, operation, True, output=output))

        report.build_time = time.time() - start_time
        return report
