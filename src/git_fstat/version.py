"""Version information, read from the installed package metadata."""

from importlib import metadata

DISTRIBUTION_NAME = "git-fstat"


def get_version() -> str:
    """Return 'git-fstat 1.0.0', or 'git-fstat unknown' when not installed."""
    try:
        version = metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        version = "unknown"
    return f"{DISTRIBUTION_NAME} {version}"
