"""Version lookup for installed and source-tree runs."""

from importlib import metadata
from pathlib import Path

DISTRIBUTION_NAME = "gauge-paths"


def get_version() -> str:
    """
    Get version for the package.

    :return: Version number.
    """
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:  # source tree on sys.path
        import setuptools_scm  # type: ignore[import-untyped]

        root = Path(__file__).resolve().parents[2]
        return str(setuptools_scm.get_version(root=str(root), fallback_version="0.0.0"))


__all__ = ["get_version"]
