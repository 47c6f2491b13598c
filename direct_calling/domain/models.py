"""Domain data models — pure Python dataclasses."""

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class DispatcherState(Enum):
    IDLE = "idle"
    PENDING = "pending"


@dataclass(frozen=True)
class ActionRequest:
    """A call waiting to be placed. ``payload`` is the cleaned number."""

    payload: str


@dataclass
class PendingSlot:
    """The single request parked until a permission decision arrives.

    ``request`` is None for a bare permission request; its sink then
    receives the granted flag itself.
    """

    request: Optional[ActionRequest]
    result_sink: asyncio.Future


@dataclass(frozen=True)
class FrontEndContext:
    """The attached front end that owns permission prompts."""

    context_id: str
    attached_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
