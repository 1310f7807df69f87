"""
Machine types a game can be run as.
"""

from enum import Enum
from typing import Optional


class MachineType(Enum):
    """Desktop (interactive, debug) or Server (headless server binary)."""

    DESKTOP = "desktop"
    SERVER = "server"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, identifier: Optional[str]) -> "MachineType":
        """Return Server for 'server', Desktop for anything else."""
        if (identifier or "").strip().lower() == "server":
            return cls.SERVER
        return cls.DESKTOP

    @property
    def engine_flag(self) -> str:
        return "-d" if self is MachineType.DESKTOP else ""
