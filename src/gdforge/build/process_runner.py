"""External Process Runner.

This module runs the external tools a build needs (cargo, docker, godot).

Design:
    - run() inherits stdout/stderr so tool output reaches the terminal
    - capture() collects stdout as raw bytes for version probes
    - A non-zero exit is a ProcessFailureError, a failed spawn a SpawnFailureError
    - On KeyboardInterrupt the child's whole process tree is terminated
"""

import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

import psutil

from ..errors import ProcessFailureError, SpawnFailureError

logger = logging.getLogger(__name__)

TERMINATE_TIMEOUT = 3


@dataclass
class CapturedOutput:
    """Result of a captured (probe) invocation."""

    returncode: int
    stdout: bytes

    @property
    def success(self) -> bool:
        return self.returncode == 0


class ProcessRunner:
    """Runs external commands synchronously.

    Example usage:
        runner = ProcessRunner()
        runner.run(["cargo", "build", "--target", "x86_64-unknown-linux-gnu"])
        output = runner.capture(["docker", "run", "--rm", image, "ls", sdk_dir])
    """

    def run(
        self,
        cmd: Sequence[str],
        cwd: Optional[Path] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        """Run a command with inherited standard streams.

        Args:
            cmd: Executable followed by its arguments
            cwd: Working directory for the child only (default: current)
            env: Extra environment variables layered over os.environ

        Raises:
            SpawnFailureError: If the executable cannot be started
            ProcessFailureError: If the command exits non-zero
        """
        argv = list(cmd)
        logger.debug("Running: %s (cwd=%s, env=%s)", argv, cwd or ".", sorted(env or {}))

        process = self._spawn(argv, cwd, env, capture=False)
        returncode = self._wait(process)

        if returncode != 0:
            raise ProcessFailureError(argv[0], returncode, argv)

    def capture(
        self,
        cmd: Sequence[str],
        cwd: Optional[Path] = None,
    ) -> CapturedOutput:
        """Run a command and collect its standard output.

        A non-zero exit is reported in the result rather than raised, so
        callers can fall back on unusable output.

        Args:
            cmd: Executable followed by its arguments
            cwd: Working directory for the child only

        Returns:
            CapturedOutput with the exit status and raw stdout bytes

        Raises:
            SpawnFailureError: If the executable cannot be started
        """
        argv = list(cmd)
        logger.debug("Capturing: %s (cwd=%s)", argv, cwd or ".")

        process = self._spawn(argv, cwd, None, capture=True)
        try:
            stdout, _ = process.communicate()
        except KeyboardInterrupt:
            self._terminate_tree(process)
            raise

        return CapturedOutput(returncode=process.returncode, stdout=stdout or b"")

    def _spawn(
        self,
        argv: List[str],
        cwd: Optional[Path],
        env: Optional[Mapping[str, str]],
        capture: bool,
    ) -> subprocess.Popen:
        child_env: Optional[Dict[str, str]] = None
        if env:
            child_env = dict(os.environ)
            child_env.update(env)

        try:
            return subprocess.Popen(
                argv,
                cwd=str(cwd) if cwd is not None else None,
                env=child_env,
                stdout=subprocess.PIPE if capture else None,
                stderr=None,
            )
        except OSError as e:
            raise SpawnFailureError(argv[0], e) from e

    def _wait(self, process: subprocess.Popen) -> int:
        try:
            return process.wait()
        except KeyboardInterrupt:
            self._terminate_tree(process)
            raise

    @staticmethod
    def _terminate_tree(process: subprocess.Popen) -> None:
        """Terminate a child and all of its descendants, children first."""
        try:
            root = psutil.Process(process.pid)
            procs = root.children(recursive=True)
            procs.reverse()
            procs.append(root)
        except psutil.NoSuchProcess:
            return

        for proc in procs:
            try:
                proc.terminate()
            except psutil.NoSuchProcess:
                pass

        _gone, alive = psutil.wait_procs(procs, timeout=TERMINATE_TIMEOUT)
        for proc in alive:
            try:
                proc.kill()
                logger.warning("Force killed stubborn process %s", proc.pid)
            except psutil.NoSuchProcess:
                pass
