"""
Build system components for gdforge.

This module provides the build/export implementation including:
- External process execution (cargo, docker, godot)
- Canonical artifact paths and relocation
- Cross-compilation container invocations and SDK probes
- Build orchestration (local and cross strategies)
"""

from .artifact_paths import ArtifactPaths
from .artifact_relocator import ArtifactRelocator
from .container import DOCKER_IMAGE, ContainerInvocation, Glob
from .manifest import get_package_name
from .orchestrator import (
    BuildOrchestrator,
    CrossOrchestrator,
    LocalOrchestrator,
    create_orchestrator,
    engine_for_export,
)
from .process_runner import CapturedOutput, ProcessRunner
from .sdk_probe import SdkProbe, cross_environment

__all__ = [
    "ArtifactPaths",
    "ArtifactRelocator",
    "BuildOrchestrator",
    "CapturedOutput",
    "ContainerInvocation",
    "CrossOrchestrator",
    "DOCKER_IMAGE",
    "Glob",
    "LocalOrchestrator",
    "ProcessRunner",
    "SdkProbe",
    "create_orchestrator",
    "cross_environment",
    "engine_for_export",
    "get_package_name",
]
