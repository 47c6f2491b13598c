"""Permission-gated call dispatcher.

Places a call right away when the platform already grants the call
permission. Otherwise the request is parked in a single pending slot,
a permission prompt is issued, and the request is replayed or declined
once ``on_authorization_result`` delivers the decision.

States: idle -> pending -> idle
         \\-> idle (already authorized, call placed immediately)

Every ``submit`` / ``request_authorization`` returns an asyncio.Future
that receives exactly one outcome: ``True``/``False`` or a
DirectCallingError. A declined permission resolves to ``False``.
"""

import asyncio
import sys
import threading
from typing import Optional, Set

from direct_calling.domain.errors import (
    ActionFailed,
    DirectCallingError,
    NoContext,
    NotSupported,
    RequestOverwritten,
)
from direct_calling.domain.models import ActionRequest, DispatcherState, FrontEndContext, PendingSlot
from direct_calling.domain.phone_number import clean_phone_number


def _log(msg: str):
    print(msg, file=sys.stderr)


def _set_result(sink: asyncio.Future, value) -> None:
    if not sink.done():
        sink.set_result(value)


def _set_exception(sink: asyncio.Future, exc: BaseException) -> None:
    if not sink.done():
        sink.set_exception(exc)


class PermissionGatedDispatcher:
    """Owns the pending slot and the attached front-end context."""

    def __init__(self, capability, overwrite_mode: str = "notify"):
        if overwrite_mode not in ("notify", "silent"):
            raise ValueError(f"unsupported overwrite mode: {overwrite_mode!r}")
        self._capability = capability
        self._overwrite_mode = overwrite_mode
        self._context: Optional[FrontEndContext] = None
        self._pending: Optional[PendingSlot] = None
        # The permission callback may arrive off the event loop thread
        self._lock = threading.Lock()
        self._tasks: Set[asyncio.Task] = set()

    @property
    def capability(self):
        return self._capability

    @property
    def context(self) -> Optional[FrontEndContext]:
        return self._context

    @property
    def pending(self) -> Optional[PendingSlot]:
        return self._pending

    @property
    def state(self) -> DispatcherState:
        return DispatcherState.PENDING if self._pending is not None else DispatcherState.IDLE

    # ── Lifecycle ──────────────────────────────────────

    def attach(self, context: FrontEndContext) -> None:
        self._context = context

    def detach(self) -> None:
        """Drop the context; a parked request fails with NoContext."""
        self._context = None
        with self._lock:
            slot = self._pending
            self._pending = None
        if slot is not None:
            _log("[dispatcher] context detached with a pending request, failing it")
            self._deliver_exception(slot.result_sink, NoContext("Activity detached"))

    # ── Operations ──────────────────────────────────────

    def check_authorization(self) -> bool:
        context = self._context
        if context is None:
            return False
        return bool(self._capability.check_authorization(context))

    def submit(self, payload: str) -> asyncio.Future:
        """Place a call to ``payload``, prompting for permission if needed."""
        loop = asyncio.get_running_loop()
        sink = loop.create_future()
        try:
            number = clean_phone_number(payload, self._capability.number_rule)
            context = self._require_context()
            if not self._capability.is_supported(context):
                raise NotSupported("Device cannot make phone calls")
        except DirectCallingError as e:
            sink.set_exception(e)
            return sink

        request = ActionRequest(payload=number)
        if self.check_authorization():
            self._spawn(sink, self._run(request, sink))
            return sink

        slot = PendingSlot(request=request, result_sink=sink)
        self._park(slot)
        self._prompt(context, slot)
        return sink

    def request_authorization(self) -> asyncio.Future:
        """Resolve to whether the call permission is (or becomes) granted."""
        loop = asyncio.get_running_loop()
        sink = loop.create_future()
        try:
            context = self._require_context()
        except NoContext as e:
            sink.set_exception(e)
            return sink

        if self.check_authorization():
            sink.set_result(True)
            return sink

        slot = PendingSlot(request=None, result_sink=sink)
        self._park(slot)
        self._prompt(context, slot)
        return sink

    def on_authorization_result(self, granted: bool) -> None:
        """Replay or decline the parked request. No-op when nothing is parked."""
        with self._lock:
            slot = self._pending
            self._pending = None
        if slot is None:
            _log(f"[dispatcher] authorization result ({granted}) with nothing pending, ignored")
            return

        sink = slot.result_sink
        if sink.done():
            # Caller cancelled; nobody is waiting for this call
            _log("[dispatcher] pending request was cancelled, dropping result")
            return
        if granted and slot.request is not None:
            loop = sink.get_loop()
            loop.call_soon_threadsafe(self._spawn, sink, self._run(slot.request, sink))
        else:
            self._deliver_result(sink, bool(granted))

    async def execute(self, payload: str) -> bool:
        """Place the call. Raises ActionFailed if the system refuses."""
        try:
            return await self._capability.perform_call(payload)
        except DirectCallingError:
            raise
        except Exception as e:
            raise ActionFailed(f"Failed to make call: {e}") from e

    # ── Internals ──────────────────────────────────────

    def _require_context(self) -> FrontEndContext:
        context = self._context
        if context is None:
            raise NoContext("Activity not available")
        return context

    def _park(self, slot: PendingSlot) -> None:
        with self._lock:
            previous = self._pending
            self._pending = slot
        if previous is None:
            return
        _log(f"[dispatcher] pending request replaced (mode={self._overwrite_mode})")
        if self._overwrite_mode == "notify":
            self._deliver_exception(
                previous.result_sink,
                RequestOverwritten("Superseded by a newer request"),
            )

    def _prompt(self, context: FrontEndContext, slot: PendingSlot) -> None:
        try:
            payload = slot.request.payload if slot.request is not None else None
            answer = self._capability.request_authorization(context, payload)
        except Exception as e:
            _log(f"[dispatcher] permission prompt failed: {e}")
            with self._lock:
                if self._pending is slot:
                    self._pending = None
            self._deliver_exception(slot.result_sink, ActionFailed(f"Permission prompt failed: {e}"))
            return
        if answer is not None:
            # Platform answered without showing a prompt
            self.on_authorization_result(answer)

    async def _run(self, request: ActionRequest, sink: asyncio.Future) -> None:
        if sink.done():
            return
        try:
            outcome = await self.execute(request.payload)
        except DirectCallingError as e:
            _log(f"[dispatcher] call failed: {e.code} {e.message}")
            _set_exception(sink, e)
            return
        _set_result(sink, outcome)

    def _spawn(self, sink: asyncio.Future, coro) -> None:
        task = sink.get_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    @staticmethod
    def _deliver_result(sink: asyncio.Future, value) -> None:
        sink.get_loop().call_soon_threadsafe(_set_result, sink, value)

    @staticmethod
    def _deliver_exception(sink: asyncio.Future, exc: BaseException) -> None:
        sink.get_loop().call_soon_threadsafe(_set_exception, sink, exc)
