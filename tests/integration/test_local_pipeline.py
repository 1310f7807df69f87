"""
Integration tests for the local build pipeline.

Fake `cargo` and `godot` executables are put on PATH so the whole
build -> relocate -> export flow runs through real processes.
"""

import os
import stat
import subprocess
import sys
import textwrap

import pytest

from gdforge.build.process_runner import ProcessRunner
from gdforge.commands import ProjectCommands
from gdforge.config import BuildProfile, PlatformTarget, load_configuration
from gdforge.errors import TargetOperationError

FAKE_CARGO = """
    import os, sys
    args = sys.argv[1:]
    if os.environ.get("FAKE_CARGO_FAIL"):
        sys.exit(101)
    if args[:1] == ["build"]:
        triple = args[args.index("--target") + 1]
        profile = "release" if "--release" in args else "debug"
        out_dir = os.path.join("target", triple, profile)
        os.makedirs(out_dir, exist_ok=True)
        with open(os.path.join(out_dir, "libgame.so"), "w") as f:
            f.write(" ".join(args))
    elif args[:1] == ["clean"]:
        pass
"""

FAKE_GODOT = """
    import os, sys
    flag, preset, output = sys.argv[1:4]
    with open(output, "w") as f:
        f.write(flag + "|" + preset)
"""


def install_tool(bin_dir, name, body):
    script = bin_dir / name
    script.write_text(f"#!{sys.executable}\n" + textwrap.dedent(body))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


@pytest.mark.integration
@pytest.mark.skipif(sys.platform == "win32", reason="fake tools are POSIX scripts")
class TestLocalPipeline:
    """End-to-end local builds with fake tools."""

    @pytest.fixture
    def fake_tools(self, tmp_path_factory, monkeypatch):
        """Put fake cargo and godot executables first on PATH."""
        bin_dir = tmp_path_factory.mktemp("fake-bin")
        install_tool(bin_dir, "cargo", FAKE_CARGO)
        for name in ("godot", "godot-headless"):
            install_tool(bin_dir, name, FAKE_GODOT)
        monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
        return bin_dir

    def test_debug_build_stages_exactly_one_library(self, project_layout, fake_tools):
        """Build linux-x86_64 debug and check the staged library."""
        commands = ProjectCommands(project_layout, load_configuration(project_layout), runner=ProcessRunner())

        report = commands.build([PlatformTarget.LINUX_X86_64], BuildProfile.DEBUG)

        library_dir = project_layout / "lib" / "x86_64-unknown-linux-gnu"
        staged = library_dir / "libgame.so"
        assert report.success
        assert sorted(p.name for p in library_dir.iterdir()) == [".gitkeep", "libgame.so"]
        assert staged.read_text() == "build --target x86_64-unknown-linux-gnu"

    def test_export_runs_engine_in_godot_dir(self, project_layout, fake_tools):
        """Export linux-x86_64 release through the fake engine."""
        commands = ProjectCommands(project_layout, load_configuration(project_layout), runner=ProcessRunner())

        report = commands.export([PlatformTarget.LINUX_X86_64], BuildProfile.RELEASE)

        output = report.results[0].output
        assert output == project_layout / "bin" / "x86_64-unknown-linux-gnu" / "game.release.x86_64-unknown-linux-gnu.x86_64"
        assert output.read_text() == "--export|Linux/X11.x86_64-unknown-linux-gnu.release"

    def test_failing_tool_is_attributed(self, project_layout, fake_tools, monkeypatch):
        """A failing cargo run is reported against its target."""
        monkeypatch.setenv("FAKE_CARGO_FAIL", "1")
        commands = ProjectCommands(project_layout, load_configuration(project_layout), runner=ProcessRunner())

        with pytest.raises(TargetOperationError) as exc_info:
            commands.build([PlatformTarget.LINUX_X86_64], BuildProfile.DEBUG)

        assert exc_info.value.target == "linux-x86_64"
        assert exc_info.value.cause.returncode == 101

    def test_cli_build(self, project_layout, fake_tools):
        """Run the installed CLI as a subprocess."""
        result = subprocess.run(
            [sys.executable, "-m", "gdforge.cli", "build", "linux-x86_64", "-C", str(project_layout)],
            capture_output=True,
            text=True,
            env=os.environ.copy(),
        )

        assert result.returncode == 0, result.stderr
        assert "A library was created at lib/x86_64-unknown-linux-gnu with a debug profile" in result.stdout
