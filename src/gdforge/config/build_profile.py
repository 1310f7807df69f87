"""
Build profiles (debug/release) and the flags each one maps to.
"""

from enum import Enum
from typing import List, Optional


class BuildProfile(Enum):
    """Compiler/export profile. Debug is the default."""

    DEBUG = "debug"
    RELEASE = "release"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> "BuildProfile":
        return cls.DEBUG

    @classmethod
    def parse(cls, identifier: Optional[str]) -> "BuildProfile":
        """
        Resolve a profile name.

        Unlike platform targets, an unknown or empty name is not an error:
        it resolves to Debug.

        Args:
            identifier: 'debug' or 'release' (case-insensitive)

        Returns:
            Matching BuildProfile, or Debug
        """
        key = (identifier or "").strip().lower()
        for profile in cls:
            if profile.value == key:
                return profile
        return cls.default()

    @property
    def is_release(self) -> bool:
        return self is BuildProfile.RELEASE

    @property
    def compiler_flag(self) -> str:
        return "--release" if self.is_release else ""

    @property
    def export_flag(self) -> str:
        return "--export" if self.is_release else "--export-debug"

    def compiler_args(self) -> List[str]:
        """Compiler flag as an argument list; empty for Debug."""
        return [self.compiler_flag] if self.compiler_flag else []
