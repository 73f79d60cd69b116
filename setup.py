import logging
from pathlib import Path

from setuptools import find_packages, setup

log = logging.getLogger(__name__)


def read_version() -> str:
    root = Path(__file__).parent
    # Prefer the scm version when building from a checkout
    try:
        from setuptools_scm import get_version

        return get_version(root=root, relative_to=__file__)
    except Exception as e:
        log.info(f"Could not determine version from scm: {e}")
        return "0.1.0"


setup(
    name="litup",
    version=read_version(),
    description="Compile hiccup-style UI trees into cached (strings, values) templates for incremental DOM renderers",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "rich>=13.0",
        "rich-click>=1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "click>=8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "litup=litup.cli.main:cli",
        ],
    },
    zip_safe=False,
)
