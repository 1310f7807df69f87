"""
Unit tests for SDK version probes and the cross-compilation environment.
"""

from unittest.mock import Mock

import pytest

from gdforge.build.process_runner import CapturedOutput, ProcessRunner
from gdforge.build.sdk_probe import (
    DARWIN_PATTERN,
    IOS_LIBRARY_PATH,
    MACOSX_SDK_PATTERN,
    MIN_DARWIN_VERSION,
    MIN_IOS_SDK_VERSION,
    MIN_MACOSX_SDK_VERSION,
    SdkProbe,
    cross_environment,
    parse_version,
)
from gdforge.config import PlatformTarget


def make_runner(*outputs):
    runner = Mock(spec=ProcessRunner)
    runner.capture.side_effect = list(outputs)
    return runner


class TestParseVersion:
    """Tests for parse_version()."""

    def test_highest_version_wins(self):
        """Test that the newest SDK is picked numerically, not lexically."""
        output = b"MacOSX10.9.sdk\nMacOSX10.15.sdk\nMacOSX10.10.sdk\n"
        assert parse_version(output, MACOSX_SDK_PATTERN) == "10.15"

    def test_darwin_suffix(self):
        """Test extraction of the osxcross darwin version."""
        output = b"x86_64-apple-darwin19-ar\nx86_64-apple-darwin19-cc\nx86_64-apple-darwin19-clang\n"
        assert parse_version(output, DARWIN_PATTERN) == "19"

    def test_non_utf8_output(self):
        """Test that undecodable output yields no version."""
        assert parse_version(b"\xff\xfe\xfa", MACOSX_SDK_PATTERN) is None

    def test_no_match(self):
        """Test that output without a match yields no version."""
        assert parse_version(b"", MACOSX_SDK_PATTERN) is None
        assert parse_version(b"README\n", MACOSX_SDK_PATTERN) is None


class TestSdkProbe:
    """Tests for SdkProbe."""

    def test_probe_reads_version(self):
        """Test a successful probe."""
        runner = make_runner(CapturedOutput(0, b"iPhoneOS12.1.sdk\n"))
        assert SdkProbe(runner).ios_sdk_version() == "12.1"

        argv = runner.capture.call_args.args[0]
        assert argv[0] == "docker"
        assert argv[-1] == "ls -1 /opt/ios-build-tools/SDK"

    @pytest.mark.parametrize(
        "output",
        [
            CapturedOutput(0, b"\xff\xfe"),
            CapturedOutput(0, b""),
            CapturedOutput(2, b"MacOSX11.1.sdk\n"),
        ],
    )
    def test_unusable_output_falls_back(self, output, caplog):
        """Test that unusable probe output falls back with a warning."""
        probe = SdkProbe(make_runner(output))

        with caplog.at_level("WARNING", logger="gdforge.build.sdk_probe"):
            assert probe.macosx_sdk_version() == MIN_MACOSX_SDK_VERSION

        assert MIN_MACOSX_SDK_VERSION in caplog.text

    def test_fallback_constants(self):
        """Test each probe's fallback constant."""
        empty = CapturedOutput(0, b"")
        probe = SdkProbe(make_runner(empty, empty, empty))
        assert probe.macosx_sdk_version() == "10.10"
        assert probe.darwin_version() == "14"
        assert probe.ios_sdk_version() == "10.2"
        assert (MIN_DARWIN_VERSION, MIN_IOS_SDK_VERSION) == ("14", "10.2")

    def test_custom_image(self):
        """Test that the probe can target another image."""
        runner = make_runner(CapturedOutput(0, b"x86_64-apple-darwin20.4-cc\n"))
        assert SdkProbe(runner, image="example/cross:1").darwin_version() == "20.4"
        assert "example/cross:1" in runner.capture.call_args.args[0]


class TestCrossEnvironment:
    """Tests for cross_environment()."""

    def test_macos_uses_probed_versions(self):
        """Test CC and include path derivation for macOS."""
        probe = Mock(spec=SdkProbe)
        probe.macosx_sdk_version.return_value = "10.15"
        probe.darwin_version.return_value = "19"

        env = cross_environment(PlatformTarget.MACOS_AARCH64, probe)

        assert env == {
            "CC": "/opt/macosx-build-tools/cross-compiler/bin/aarch64-apple-darwin19-cc",
            "C_INCLUDE_PATH": "/opt/macosx-build-tools/cross-compiler/SDK/MacOSX10.15.sdk/usr/include",
        }

    def test_macos_with_fallbacks(self):
        """Test that probe fallbacks still produce a full environment."""
        empty = CapturedOutput(0, b"")
        env = cross_environment(PlatformTarget.MACOS_X86_64, SdkProbe(make_runner(empty, empty)))
        assert env["CC"].endswith("/x86_64-apple-darwin14-cc")
        assert "MacOSX10.10.sdk" in env["C_INCLUDE_PATH"]

    def test_ios(self):
        """Test the iOS include and library paths."""
        probe = Mock(spec=SdkProbe)
        probe.ios_sdk_version.return_value = "12.1"

        env = cross_environment(PlatformTarget.IOS_AARCH64, probe)

        assert env == {
            "C_INCLUDE_PATH": "/opt/ios-build-tools/SDK/iPhoneOS12.1.sdk/usr/include",
            "LD_LIBRARY_PATH": IOS_LIBRARY_PATH,
        }

    @pytest.mark.parametrize(
        "target,include",
        [
            (PlatformTarget.WINDOWS_X86_64_GNU, "/usr/x86_64-w64-mingw32/include"),
            (PlatformTarget.WINDOWS_X86_64_MSVC, "/usr/x86_64-w64-mingw32/include"),
            (PlatformTarget.WINDOWS_X86_GNU, "/usr/i686-w64-mingw32/include"),
        ],
    )
    def test_windows(self, target, include):
        """Test the fixed Windows include path."""
        probe = Mock(spec=SdkProbe)
        assert cross_environment(target, probe) == {"C_INCLUDE_PATH": include}
        probe.macosx_sdk_version.assert_not_called()

    @pytest.mark.parametrize(
        "target",
        [PlatformTarget.LINUX_X86_64, PlatformTarget.ANDROID_LINUX_AARCH64, PlatformTarget.LINUX_X86],
    )
    def test_other_targets_have_no_environment(self, target):
        """Test that other targets need no extra variables and no probes."""
        probe = Mock(spec=SdkProbe)
        assert cross_environment(target, probe) == {}
        probe.ios_sdk_version.assert_not_called()
