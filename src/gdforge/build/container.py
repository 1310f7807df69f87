"""
Cross-compilation container invocations.

Commands that run inside the cross-compiler image are kept as argument
lists and only joined into a single shell string when the docker argv is
produced. Steps are chained with '&&' so the first failing step decides
the container's exit status.
"""

import shlex
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Sequence, Union

DOCKER_EXE = "docker"
DOCKER_IMAGE = "macalimlim/godot-rust-cross-compiler:0.4.0"
CONTAINER_WORKDIR = "/build"
CONTAINER_SHELL = "/bin/bash"


class Glob(str):
    """A path argument whose final component is left unquoted for shell expansion."""

    def quoted(self) -> str:
        path = PurePosixPath(self)
        return f"{shlex.quote(str(path.parent))}/{path.name}"


ShellArg = Union[str, Glob]


def quote_arg(arg: ShellArg) -> str:
    if isinstance(arg, Glob):
        return arg.quoted()
    return shlex.quote(arg)


def join_steps(steps: Sequence[Sequence[ShellArg]]) -> str:
    """Join command steps into one '&&'-chained shell string."""
    return " && ".join(" ".join(quote_arg(arg) for arg in step) for step in steps)


@dataclass
class ContainerInvocation:
    """A shell script run inside the cross-compilation image.

    Example:
        invocation = ContainerInvocation(
            steps=[["cargo", "clean"], ["rm", "-rf", "godot/.import"]],
            mount_source=Path.cwd(),
        )
        runner.run(invocation.argv())
    """

    steps: List[List[ShellArg]]
    mount_source: Optional[Path] = None
    env: Dict[str, str] = field(default_factory=dict)
    image: str = DOCKER_IMAGE

    def script(self) -> str:
        return join_steps(self.steps)

    def argv(self) -> List[str]:
        cmd = [DOCKER_EXE, "run", "--rm"]
        if self.mount_source is not None:
            cmd.extend(["-v", f"{self.mount_source}:{CONTAINER_WORKDIR}", "-w", CONTAINER_WORKDIR])
        for key in sorted(self.env):
            cmd.extend(["-e", f"{key}={self.env[key]}"])
        cmd.extend([self.image, CONTAINER_SHELL, "-c", self.script()])
        return cmd
