"""
Unit tests for ArtifactRelocator.
"""

import pytest

from gdforge.build.artifact_relocator import ArtifactRelocator
from gdforge.errors import FilesystemError


@pytest.fixture
def relocator():
    """Create an artifact relocator."""
    return ArtifactRelocator()


class TestArtifactRelocator:
    """Tests for ArtifactRelocator.relocate()."""

    def test_moves_into_new_directory(self, relocator, tmp_path):
        """Test relocation creates the destination directory."""
        source = tmp_path / "target" / "libgame.so"
        source.parent.mkdir()
        source.write_bytes(b"fresh")
        destination = tmp_path / "lib" / "x86_64-unknown-linux-gnu" / "libgame.so"

        result = relocator.relocate(source, destination)

        assert result == destination
        assert destination.read_bytes() == b"fresh"
        assert not source.exists()

    def test_replaces_existing_destination(self, relocator, tmp_path):
        """Test that a stale staged library is replaced."""
        source = tmp_path / "libgame.so"
        source.write_bytes(b"fresh")
        destination = tmp_path / "lib" / "libgame.so"
        destination.parent.mkdir()
        destination.write_bytes(b"stale")

        relocator.relocate(source, destination)

        assert destination.read_bytes() == b"fresh"
        assert not source.exists()
        assert list(destination.parent.iterdir()) == [destination]

    def test_second_call_is_already_satisfied(self, relocator, tmp_path):
        """Test idempotency when the source was already moved."""
        source = tmp_path / "libgame.so"
        source.write_bytes(b"fresh")
        destination = tmp_path / "lib" / "libgame.so"

        relocator.relocate(source, destination)
        result = relocator.relocate(source, destination)

        assert result == destination
        assert destination.read_bytes() == b"fresh"

    def test_missing_source_without_destination_fails(self, relocator, tmp_path):
        """Test that nothing to move and nothing staged is an error."""
        source = tmp_path / "libgame.so"
        with pytest.raises(FilesystemError) as exc_info:
            relocator.relocate(source, tmp_path / "lib" / "libgame.so")
        assert exc_info.value.path == source

    def test_os_error_is_wrapped(self, relocator, tmp_path, monkeypatch):
        """Test that OSError from the move is surfaced as FilesystemError."""
        source = tmp_path / "libgame.so"
        source.write_bytes(b"fresh")

        def failing_move(src, dst):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr("gdforge.build.artifact_relocator.shutil.move", failing_move)

        with pytest.raises(FilesystemError) as exc_info:
            relocator.relocate(source, tmp_path / "lib" / "libgame.so")
        assert isinstance(exc_info.value.__cause__, PermissionError)
