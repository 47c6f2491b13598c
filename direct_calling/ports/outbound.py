"""Outbound ports — interfaces for platform adapters."""

from typing import Optional, Protocol, runtime_checkable

from direct_calling.domain.models import FrontEndContext
from direct_calling.domain.phone_number import NumberRule


@runtime_checkable
class CallCapability(Protocol):
    """One platform's permission model and call mechanism."""

    @property
    def number_rule(self) -> NumberRule: ...

    def is_supported(self, context: FrontEndContext) -> bool: ...

    def check_authorization(self, context: FrontEndContext) -> bool: ...

    def request_authorization(
        self, context: FrontEndContext, payload: Optional[str] = None
    ) -> Optional[bool]:
        """Return the answer if known now, or None once a prompt is issued."""

    def record_authorization(self, granted: bool) -> None: ...

    async def perform_call(self, number: str) -> bool: ...

    async def prepare(self) -> None:
        """Warm any lookups the sync checks rely on. Called at startup."""


@runtime_checkable
class UrlOpener(Protocol):
    """Interface for handing a URL to the system."""

    def can_open(self, scheme: str) -> bool: ...

    async def open(self, url: str) -> None: ...

    async def refresh(self, scheme: str) -> bool: ...


@runtime_checkable
class PromptNotifier(Protocol):
    """Interface for surfacing a permission prompt to the user."""

    async def send_prompt(self, prompt: dict) -> None: ...


@runtime_checkable
class GrantStore(Protocol):
    """Interface for persisted permission grants."""

    def is_granted(self, permission: str) -> bool: ...
    def set_granted(self, permission: str, granted: bool) -> None: ...
