"""
Artifact relocation.

Moves a freshly built library into its canonical staging location,
replacing any stale copy left by a previous build.
"""

import logging
import shutil
from pathlib import Path

from ..errors import FilesystemError

logger = logging.getLogger(__name__)


class ArtifactRelocator:
    """Stages build artifacts idempotently."""

    def relocate(self, source: Path, destination: Path) -> Path:
        """
        Move source to destination, removing an existing destination first.

        A missing source with a destination already in place is treated as
        already relocated.

        Args:
            source: Artifact produced by the compiler
            destination: Canonical staged path

        Returns:
            The destination path

        Raises:
            FilesystemError: If the source is missing and nothing is staged,
                or if removing or moving fails
        """
        if not source.exists():
            if destination.exists():
                logger.debug("%s already relocated to %s", source, destination)
                return destination
            raise FilesystemError(source, FileNotFoundError(2, "No such file or directory"))

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            if destination.exists():
                logger.debug("Removing stale artifact %s", destination)
                destination.unlink()
            shutil.move(str(source), str(destination))
        except OSError as e:
            raise FilesystemError(destination, e) from e

        logger.debug("Relocated %s -> %s", source, destination)
        return destination
