"""
Platform targets supported by gdforge.

This module centralizes the toolchain attributes of every platform the
project can be built and exported for: the compiler target triple, the
shared library naming convention, the exported application extension and
the engine export-preset family. Every PlatformTarget has exactly one
TargetSpec in TARGET_SPECS.
"""

import platform
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from ..errors import UnsupportedTargetError


class PlatformTarget(Enum):
    """Closed set of platform targets.

    Declaration order is the canonical order used when sorting targets.
    """

    ANDROID_LINUX_AARCH64 = "android-aarch64"
    ANDROID_LINUX_ARMV7 = "android-arm"
    ANDROID_LINUX_X86 = "android-x86"
    ANDROID_LINUX_X86_64 = "android-x86_64"
    IOS_AARCH64 = "ios-aarch64"
    LINUX_X86 = "linux-x86"
    LINUX_X86_64 = "linux-x86_64"
    MACOS_X86_64 = "macos-x86_64"
    MACOS_AARCH64 = "macos-aarch64"
    WINDOWS_X86_GNU = "windows-x86-gnu"
    WINDOWS_X86_MSVC = "windows-x86-msvc"
    WINDOWS_X86_64_GNU = "windows-x86_64-gnu"
    WINDOWS_X86_64_MSVC = "windows-x86_64-msvc"

    def __lt__(self, other: "PlatformTarget") -> bool:
        if not isinstance(other, PlatformTarget):
            return NotImplemented
        return _CANONICAL_ORDER[self] < _CANONICAL_ORDER[other]

    def __str__(self) -> str:
        return self.triple

    @classmethod
    def default(cls) -> "PlatformTarget":
        """Target used when the host platform is not a known target."""
        return cls.WINDOWS_X86_64_MSVC

    @classmethod
    def parse(cls, identifier: str) -> "PlatformTarget":
        """
        Resolve a textual platform identifier.

        Args:
            identifier: Identifier such as 'linux-x86_64' (case-insensitive)

        Returns:
            Matching PlatformTarget

        Raises:
            UnsupportedTargetError: If the identifier is not recognized
        """
        key = identifier.strip().lower()
        target = _IDENTIFIERS.get(key)
        if target is None:
            raise UnsupportedTargetError(identifier)
        return target

    @property
    def spec(self) -> "TargetSpec":
        return TARGET_SPECS[self]

    @property
    def triple(self) -> str:
        return self.spec.triple

    @property
    def library_prefix(self) -> str:
        return "" if self.is_windows else "lib"

    @property
    def library_extension(self) -> str:
        return self.spec.library_extension

    @property
    def application_extension(self) -> str:
        return self.spec.application_extension

    @property
    def export_family_name(self) -> str:
        return self.spec.export_family_name

    @property
    def is_android(self) -> bool:
        return self.spec.family == "android"

    @property
    def is_ios(self) -> bool:
        return self.spec.family == "ios"

    @property
    def is_linux_desktop(self) -> bool:
        return self.spec.family == "linux"

    @property
    def is_linux_server_capable(self) -> bool:
        return self is PlatformTarget.LINUX_X86_64

    @property
    def is_macos(self) -> bool:
        return self.spec.family == "macos"

    @property
    def is_windows(self) -> bool:
        return self.spec.family == "windows"

    @property
    def arch(self) -> str:
        """Architecture component of the triple (e.g. 'x86_64', 'aarch64')."""
        return self.triple.split("-", 1)[0]

    def attributes(self) -> Dict[str, str]:
        """Return the naming attributes of this target as a plain dict."""
        return {
            "triple": self.triple,
            "prefix": self.library_prefix,
            "lib_ext": self.library_extension,
            "app_ext": self.application_extension,
            "export_name": self.export_family_name,
        }


@dataclass(frozen=True)
class TargetSpec:
    """Toolchain attributes of a platform target."""

    triple: str
    family: str  # android, ios, linux, macos, windows
    library_extension: str
    application_extension: str
    export_family_name: str


TARGET_SPECS: Dict[PlatformTarget, TargetSpec] = {
    PlatformTarget.ANDROID_LINUX_AARCH64: TargetSpec(
        triple="aarch64-linux-android",
        family="android",
        library_extension="so",
        application_extension=".apk",
        export_family_name="Android",
    ),
    PlatformTarget.ANDROID_LINUX_ARMV7: TargetSpec(
        triple="armv7-linux-androideabi",
        family="android",
        library_extension="so",
        application_extension=".apk",
        export_family_name="Android",
    ),
    PlatformTarget.ANDROID_LINUX_X86: TargetSpec(
        triple="i686-linux-android",
        family="android",
        library_extension="so",
        application_extension=".apk",
        export_family_name="Android",
    ),
    PlatformTarget.ANDROID_LINUX_X86_64: TargetSpec(
        triple="x86_64-linux-android",
        family="android",
        library_extension="so",
        application_extension=".apk",
        export_family_name="Android",
    ),
    PlatformTarget.IOS_AARCH64: TargetSpec(
        triple="aarch64-apple-ios",
        family="ios",
        library_extension="a",  # static library
        application_extension=".zip",
        export_family_name="iOS",
    ),
    PlatformTarget.LINUX_X86: TargetSpec(
        triple="i686-unknown-linux-gnu",
        family="linux",
        library_extension="so",
        application_extension="",
        export_family_name="Linux/X11",
    ),
    PlatformTarget.LINUX_X86_64: TargetSpec(
        triple="x86_64-unknown-linux-gnu",
        family="linux",
        library_extension="so",
        application_extension=".x86_64",
        export_family_name="Linux/X11",
    ),
    PlatformTarget.MACOS_X86_64: TargetSpec(
        triple="x86_64-apple-darwin",
        family="macos",
        library_extension="dylib",
        application_extension=".zip",
        export_family_name="Mac OSX",
    ),
    PlatformTarget.MACOS_AARCH64: TargetSpec(
        triple="aarch64-apple-darwin",
        family="macos",
        library_extension="dylib",
        application_extension=".zip",
        export_family_name="Mac OSX",
    ),
    PlatformTarget.WINDOWS_X86_GNU: TargetSpec(
        triple="i686-pc-windows-gnu",
        family="windows",
        library_extension="dll",
        application_extension=".exe",
        export_family_name="Windows Desktop",
    ),
    PlatformTarget.WINDOWS_X86_MSVC: TargetSpec(
        triple="i686-pc-windows-msvc",
        family="windows",
        library_extension="dll",
        application_extension=".exe",
        export_family_name="Windows Desktop",
    ),
    PlatformTarget.WINDOWS_X86_64_GNU: TargetSpec(
        triple="x86_64-pc-windows-gnu",
        family="windows",
        library_extension="dll",
        application_extension=".exe",
        export_family_name="Windows Desktop",
    ),
    PlatformTarget.WINDOWS_X86_64_MSVC: TargetSpec(
        triple="x86_64-pc-windows-msvc",
        family="windows",
        library_extension="dll",
        application_extension=".exe",
        export_family_name="Windows Desktop",
    ),
}

_CANONICAL_ORDER: Dict[PlatformTarget, int] = {
    target: index for index, target in enumerate(PlatformTarget)
}

# Canonical identifiers plus the short msvc aliases
_IDENTIFIERS: Dict[str, PlatformTarget] = {target.value: target for target in PlatformTarget}
_IDENTIFIERS["windows-x86"] = PlatformTarget.WINDOWS_X86_MSVC
_IDENTIFIERS["windows-x86_64"] = PlatformTarget.WINDOWS_X86_64_MSVC


def known_identifiers() -> List[str]:
    """Return every accepted platform identifier, sorted."""
    return sorted(_IDENTIFIERS)


def parse_target_list(text: Optional[str]) -> List[PlatformTarget]:
    """
    Parse a comma-separated list of platform identifiers.

    Blank entries are ignored, duplicates are collapsed, and the result is
    sorted in canonical order. An empty or missing list resolves to the
    host platform.

    Args:
        text: Comma-separated identifiers (e.g. 'linux-x86_64,windows-x86_64')

    Returns:
        Unique, sorted list of targets

    Raises:
        UnsupportedTargetError: If any non-blank entry is not recognized
    """
    entries = [entry.strip() for entry in (text or "").split(",")]
    identifiers = [entry for entry in entries if entry]
    if not identifiers:
        return [current_platform()]
    return sorted({PlatformTarget.parse(identifier) for identifier in identifiers})


def current_platform_identifier() -> str:
    """
    Describe the host as '{os}-{arch}'.

    Returns:
        Identifier such as 'linux-x86_64', 'macos-aarch64' or 'windows-x86_64'
    """
    system = platform.system().lower()
    machine = platform.machine().lower()

    if system == "darwin":
        os_name = "macos"
    else:
        os_name = system

    if machine in ("amd64", "x86_64", "x64"):
        arch = "x86_64"
    elif machine in ("arm64", "aarch64"):
        arch = "aarch64"
    elif machine in ("i386", "i686", "x86"):
        arch = "x86"
    else:
        arch = machine

    return f"{os_name}-{arch}"


def current_platform() -> PlatformTarget:
    """
    Resolve the host platform to a target.

    Falls back to PlatformTarget.default() when the host is not a known
    target.
    """
    try:
        return PlatformTarget.parse(current_platform_identifier())
    except UnsupportedTargetError:
        return PlatformTarget.default()
