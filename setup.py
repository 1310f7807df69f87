"""
Setup file.
"""

import os

from setuptools import find_namespace_packages, setup

URL = "https://github.com/gdforge/gdforge"
KEYWORDS = "godot gdnative rust cargo cross-compilation game export build-tool"
HERE = os.path.dirname(os.path.abspath(__file__))


if __name__ == "__main__":
    setup(
        name="gdforge",
        version="0.1.0",
        description="Build, export and run Godot games with Rust native code",
        keywords=KEYWORDS,
        url=URL,
        package_dir={"": "src"},
        packages=find_namespace_packages(where="src", include=["gdforge", "gdforge.*"]),
        python_requires=">=3.11",
        install_requires=["psutil"],
        extras_require={"test": ["pytest"]},
        entry_points={"console_scripts": ["gdforge = gdforge.cli:main"]},
        include_package_data=True)
