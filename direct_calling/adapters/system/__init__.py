"""System adapters."""

from direct_calling.adapters.system.url_opener import SystemUrlOpener, default_opener_command

__all__ = ["SystemUrlOpener", "default_opener_command"]
