"""Port interfaces (Hexagonal Architecture)."""

from direct_calling.ports.inbound import MethodCall, MethodResult
from direct_calling.ports.outbound import CallCapability, GrantStore, PromptNotifier, UrlOpener

__all__ = [
    "MethodCall",
    "MethodResult",
    "CallCapability",
    "GrantStore",
    "PromptNotifier",
    "UrlOpener",
]
