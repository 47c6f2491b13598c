"""Method-channel plugin: routes channel calls to the dispatcher.

Mirrors the lifecycle of a mobile host: the front end attaches and
detaches, permission results arrive tagged with a request code, and
method calls arrive by name with a dict of arguments.
"""

import sys
from typing import List, Optional

from direct_calling.domain.dispatcher import PermissionGatedDispatcher
from direct_calling.domain.errors import DirectCallingError, InvalidInput
from direct_calling.domain.models import FrontEndContext
from direct_calling.ports.inbound import MethodCall, MethodResult

PERMISSION_GRANTED = 0
PERMISSION_DENIED = -1


def _log(msg: str):
    print(msg, file=sys.stderr)


class DirectCallingPlugin:
    """Channel handler for makeCall / checkPermission / requestPermission."""

    def __init__(self, dispatcher: PermissionGatedDispatcher, request_code: int = 1001):
        self._dispatcher = dispatcher
        self._request_code = request_code

    @property
    def dispatcher(self) -> PermissionGatedDispatcher:
        return self._dispatcher

    @property
    def request_code(self) -> int:
        return self._request_code

    async def handle(self, call: MethodCall) -> MethodResult:
        if call.method == "makeCall":
            phone_number = call.argument("phoneNumber")
            if not isinstance(phone_number, str) or not phone_number:
                return MethodResult.error(InvalidInput.code, "Phone number cannot be empty")
            return await self._await(self._dispatcher.submit(phone_number))

        if call.method == "checkPermission":
            return MethodResult.success(self._dispatcher.check_authorization())

        if call.method == "requestPermission":
            return await self._await(self._dispatcher.request_authorization())

        return MethodResult.not_implemented()

    def on_request_permissions_result(self, request_code: int, grant_results: List[int]) -> bool:
        """Feed a permission decision to the dispatcher. False if not ours."""
        if request_code != self._request_code:
            return False

        granted = bool(grant_results) and grant_results[0] == PERMISSION_GRANTED
        _log(f"[plugin] permission result: granted={granted}")
        try:
            self._dispatcher.capability.record_authorization(granted)
        except OSError as e:
            # The decision still applies to this request, it just is not remembered
            _log(f"[plugin] failed to persist permission result: {e}")
        finally:
            self._dispatcher.on_authorization_result(granted)
        return True

    # ── Lifecycle ──────────────────────────────────────

    def on_attached_to_activity(self, context: FrontEndContext) -> None:
        _log(f"[plugin] attached to {context.context_id}")
        self._dispatcher.attach(context)

    def on_reattached_to_activity_for_config_changes(self, context: FrontEndContext) -> None:
        self.on_attached_to_activity(context)

    def on_detached_from_activity_for_config_changes(self) -> None:
        self.on_detached_from_activity()

    def on_detached_from_activity(self) -> None:
        _log("[plugin] detached")
        self._dispatcher.detach()

    @property
    def context(self) -> Optional[FrontEndContext]:
        return self._dispatcher.context

    @staticmethod
    async def _await(handle) -> MethodResult:
        try:
            return MethodResult.success(await handle)
        except DirectCallingError as e:
            return MethodResult.error(e.code, e.message)
