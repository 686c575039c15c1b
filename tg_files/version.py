"""Single source of truth for the package version.

Read from the installed distribution's metadata, which setuptools fills in
from pyproject.toml.
"""

from importlib.metadata import version

DISTRIBUTION_NAME = "tg-files"


def get_version() -> str:
    """Return the version of the installed ``tg-files`` distribution."""
    return version(DISTRIBUTION_NAME)


__version__: str = get_version()
