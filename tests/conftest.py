"""
Shared fixtures for the gdforge test suite.
"""

import pytest

from gdforge.commands import PROJECT_FILES
from gdforge.config import PlatformTarget

CARGO_MANIFEST = '[package]\nname = "game"\nversion = "0.1.0"\n\n[lib]\ncrate-type = ["cdylib"]\n'


@pytest.fixture
def project_layout(tmp_path):
    """Create a complete, valid gdforge project in a temp directory."""
    for entry in PROJECT_FILES:
        path = tmp_path / entry
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("")
    (tmp_path / "rust" / "Cargo.toml").write_text(CARGO_MANIFEST)

    for target in PlatformTarget:
        for root in ("bin", "lib"):
            keep = tmp_path / root / target.triple / ".gitkeep"
            keep.parent.mkdir(parents=True, exist_ok=True)
            keep.write_text("")

    return tmp_path
