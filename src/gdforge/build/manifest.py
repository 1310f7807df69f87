"""
Cargo manifest access.

The package name declared in rust/Cargo.toml names every library and
exported binary.
"""

import tomllib
from pathlib import Path

from ..errors import ManifestError, MissingPackageNameError

RUST_DIR = "rust"
MANIFEST_FILE = "Cargo.toml"


def get_package_name(project_dir: Path) -> str:
    """
    Read [package].name from the project's rust/Cargo.toml.

    Args:
        project_dir: Project root

    Returns:
        The declared package name

    Raises:
        ManifestError: If the manifest is missing, unreadable or not valid TOML
        MissingPackageNameError: If no package name is declared
    """
    manifest_path = Path(project_dir) / RUST_DIR / MANIFEST_FILE

    try:
        with open(manifest_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ManifestError(f"Cargo manifest not found: {manifest_path}") from e
    except OSError as e:
        raise ManifestError(f"Cannot read {manifest_path}: {e.strerror or e}") from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ManifestError(f"Failed to parse {manifest_path}: {e}") from e

    package = data.get("package")
    name = package.get("name") if isinstance(package, dict) else None
    if not isinstance(name, str) or not name.strip():
        raise MissingPackageNameError(manifest_path)

    return name.strip()
