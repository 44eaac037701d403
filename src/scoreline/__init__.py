"""scoreline: live match overlay with two-language name rotation."""

from scoreline.version import get_scoreline_version

__version__ = get_scoreline_version()

__all__ = ["__version__"]
