"""direct_calling — place phone calls behind a permission prompt."""

from direct_calling.config import __version__

__all__ = ["__version__"]
