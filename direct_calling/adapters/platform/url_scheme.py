"""URL-scheme model — no permission prompt, calls go through a tel: handler."""

from typing import Optional

from direct_calling.domain.errors import ActionFailed
from direct_calling.domain.models import FrontEndContext
from direct_calling.domain.phone_number import URL_SCHEME_RULE, NumberRule, to_tel_uri


class UrlSchemeCallCapability:
    """CallCapability where "authorized" means a tel: handler exists."""

    def __init__(self, opener):
        self._opener = opener

    @property
    def number_rule(self) -> NumberRule:
        return URL_SCHEME_RULE

    def is_supported(self, context: FrontEndContext) -> bool:
        return self._opener.can_open("tel")

    def check_authorization(self, context: FrontEndContext) -> bool:
        return self.is_supported(context)

    def request_authorization(
        self, context: FrontEndContext, payload: Optional[str] = None
    ) -> Optional[bool]:
        return self.is_supported(context)

    def record_authorization(self, granted: bool) -> None:
        pass

    async def prepare(self) -> None:
        await self._opener.refresh("tel")

    async def perform_call(self, number: str) -> bool:
        try:
            await self._opener.open(to_tel_uri(number))
        except ActionFailed as e:
            raise ActionFailed(f"Failed to open Phone app: {e.message}") from e
        return True
