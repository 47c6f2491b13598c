"""Prompted permission model — the user must grant CALL_PHONE once.

The grant is persisted in a GrantStore. Until it is granted, each
request sends a prompt through the PromptNotifier and the answer comes
back later through the permission-result callback.
"""

import asyncio
import sys
from typing import Optional, Set

from direct_calling.domain.models import FrontEndContext
from direct_calling.domain.phone_number import PROMPTED_RULE, NumberRule, to_tel_uri

CALL_PHONE = "CALL_PHONE"


def _log(msg: str):
    print(msg, file=sys.stderr)


class PromptedCallCapability:
    """CallCapability with a stored grant and an out-of-band prompt."""

    def __init__(
        self,
        grant_store,
        notifier,
        opener,
        request_code: int = 1001,
        permission: str = CALL_PHONE,
    ):
        self._grants = grant_store
        self._notifier = notifier
        self._opener = opener
        self._request_code = request_code
        self._permission = permission
        self._prompt_tasks: Set[asyncio.Task] = set()

    @property
    def number_rule(self) -> NumberRule:
        return PROMPTED_RULE

    @property
    def request_code(self) -> int:
        return self._request_code

    @property
    def permission(self) -> str:
        return self._permission

    def is_supported(self, context: FrontEndContext) -> bool:
        return True

    def check_authorization(self, context: FrontEndContext) -> bool:
        return self._grants.is_granted(self._permission)

    def request_authorization(
        self, context: FrontEndContext, payload: Optional[str] = None
    ) -> Optional[bool]:
        if self.check_authorization(context):
            return True

        prompt = {
            "request_code": self._request_code,
            "permission": self._permission,
            "context_id": context.context_id,
            # None for a bare permission request
            "phone_number": payload,
        }
        task = asyncio.get_running_loop().create_task(self._notifier.send_prompt(prompt))
        self._prompt_tasks.add(task)
        task.add_done_callback(self._on_prompt_sent)
        return None

    def record_authorization(self, granted: bool) -> None:
        self._grants.set_granted(self._permission, granted)

    async def perform_call(self, number: str) -> bool:
        await self._opener.open(to_tel_uri(number))
        return True

    async def prepare(self) -> None:
        pass

    def _on_prompt_sent(self, task: asyncio.Task) -> None:
        self._prompt_tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            # The request stays pending; a result can still be posted manually
            _log(f"[prompted] failed to deliver permission prompt: {exc}")
