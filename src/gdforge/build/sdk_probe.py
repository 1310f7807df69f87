"""SDK version probes and cross-compilation environment.

The cross-compiler image ships versioned Apple SDKs and an osxcross
compiler whose file name carries the darwin version. Those versions are
read from the image at build time; when a probe's output is unusable the
minimum versions below are substituted and a warning is logged.
"""

import logging
import re
from typing import Dict, Optional, Tuple

from ..config.platform_target import PlatformTarget
from .container import ContainerInvocation
from .process_runner import ProcessRunner

logger = logging.getLogger(__name__)

MACOSX_TOOLS_DIR = "/opt/macosx-build-tools/cross-compiler"
MACOSX_SDK_DIR = f"{MACOSX_TOOLS_DIR}/SDK"
MACOSX_BIN_DIR = f"{MACOSX_TOOLS_DIR}/bin"
IOS_TOOLS_DIR = "/opt/ios-build-tools"
IOS_SDK_DIR = f"{IOS_TOOLS_DIR}/SDK"
IOS_LIBRARY_PATH = f"{IOS_TOOLS_DIR}/cctools/lib"

MIN_MACOSX_SDK_VERSION = "10.10"
MIN_DARWIN_VERSION = "14"
MIN_IOS_SDK_VERSION = "10.2"

_VERSION = r"(\d+(?:\.\d+)*)"
MACOSX_SDK_PATTERN = re.compile(rf"MacOSX{_VERSION}\.sdk")
DARWIN_PATTERN = re.compile(rf"-apple-darwin{_VERSION}-cc\b")
IOS_SDK_PATTERN = re.compile(rf"iPhoneOS{_VERSION}\.sdk")


def _version_key(version: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


def parse_version(output: bytes, pattern: "re.Pattern[str]") -> Optional[str]:
    """
    Extract the highest version matched by pattern from raw probe output.

    Args:
        output: Raw stdout bytes of the probe
        pattern: Regex with one group capturing a dotted version

    Returns:
        The highest matching version, or None if the output is not UTF-8
        or contains no match
    """
    try:
        text = output.decode("utf-8")
    except UnicodeDecodeError:
        return None

    versions = pattern.findall(text)
    if not versions:
        return None
    return max(versions, key=_version_key)


class SdkProbe:
    """Reads toolchain versions from the cross-compilation image."""

    def __init__(self, runner: ProcessRunner, image: Optional[str] = None):
        self.runner = runner
        self.image = image

    def macosx_sdk_version(self) -> str:
        return self._probe("macOS SDK", MACOSX_SDK_DIR, MACOSX_SDK_PATTERN, MIN_MACOSX_SDK_VERSION)

    def darwin_version(self) -> str:
        return self._probe("osxcross darwin", MACOSX_BIN_DIR, DARWIN_PATTERN, MIN_DARWIN_VERSION)

    def ios_sdk_version(self) -> str:
        return self._probe("iOS SDK", IOS_SDK_DIR, IOS_SDK_PATTERN, MIN_IOS_SDK_VERSION)

    def _probe(
        self,
        name: str,
        directory: str,
        pattern: "re.Pattern[str]",
        fallback: str,
    ) -> str:
        invocation = ContainerInvocation(steps=[["ls", "-1", directory]])
        if self.image:
            invocation.image = self.image

        output = self.runner.capture(invocation.argv())
        version = parse_version(output.stdout, pattern) if output.success else None

        if version is None:
            logger.warning(
                "%s probe returned unusable output (status %s, %r); using %s",
                name,
                output.returncode,
                output.stdout[:80],
                fallback,
            )
            return fallback
        return version


def cross_environment(target: PlatformTarget, probe: SdkProbe) -> Dict[str, str]:
    """
    Environment variables to inject into the container for a target.

    Args:
        target: Target being cross-compiled
        probe: Probe used for targets whose paths depend on SDK versions

    Returns:
        Mapping of variable name to value (empty for most targets)
    """
    if target.is_windows:
        mingw_arch = "i686" if target.arch == "i686" else "x86_64"
        return {"C_INCLUDE_PATH": f"/usr/{mingw_arch}-w64-mingw32/include"}

    if target.is_macos:
        sdk_version = probe.macosx_sdk_version()
        darwin_version = probe.darwin_version()
        return {
            "CC": f"{MACOSX_BIN_DIR}/{target.arch}-apple-darwin{darwin_version}-cc",
            "C_INCLUDE_PATH": f"{MACOSX_SDK_DIR}/MacOSX{sdk_version}.sdk/usr/include",
        }

    if target.is_ios:
        sdk_version = probe.ios_sdk_version()
        return {
            "C_INCLUDE_PATH": f"{IOS_SDK_DIR}/iPhoneOS{sdk_version}.sdk/usr/include",
            "LD_LIBRARY_PATH": IOS_LIBRARY_PATH,
        }

    return {}
