"""Domain layer — pure Python, no framework dependencies."""

from direct_calling.domain.dispatcher import PermissionGatedDispatcher
from direct_calling.domain.errors import (
    ActionFailed,
    DirectCallingError,
    InvalidInput,
    NoContext,
    NotSupported,
    RequestOverwritten,
)
from direct_calling.domain.models import ActionRequest, DispatcherState, FrontEndContext, PendingSlot
from direct_calling.domain.phone_number import (
    PROMPTED_RULE,
    URL_SCHEME_RULE,
    NumberRule,
    clean_phone_number,
    to_tel_uri,
)

__all__ = [
    "PermissionGatedDispatcher",
    "ActionFailed",
    "DirectCallingError",
    "InvalidInput",
    "NoContext",
    "NotSupported",
    "RequestOverwritten",
    "ActionRequest",
    "DispatcherState",
    "FrontEndContext",
    "PendingSlot",
    "PROMPTED_RULE",
    "URL_SCHEME_RULE",
    "NumberRule",
    "clean_phone_number",
    "to_tel_uri",
]
