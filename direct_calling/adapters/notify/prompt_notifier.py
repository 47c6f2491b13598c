"""Permission prompt notifiers — implement PromptNotifier."""

import sys

import aiohttp


def _log(msg: str):
    print(msg, file=sys.stderr)


class LogPromptNotifier:
    """Writes the prompt to stderr. Used when no webhook is configured."""

    async def send_prompt(self, prompt: dict) -> None:
        _log(
            f"[prompt] permission {prompt.get('permission')} requested "
            f"(request_code={prompt.get('request_code')}, context={prompt.get('context_id')}). "
            f"Answer with POST /direct_calling/permission/result"
        )


class WebhookPromptNotifier:
    """Posts the prompt as JSON to a webhook the front end listens on."""

    def __init__(self, url: str, timeout: float = 10.0):
        self._url = url
        self._timeout = timeout

    @property
    def is_configured(self) -> bool:
        return bool(self._url)

    async def send_prompt(self, prompt: dict) -> None:
        timeout = aiohttp.ClientTimeout(total=self._timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(self._url, json=prompt) as resp:
                if resp.status >= 400:
                    body = await resp.text()
                    raise RuntimeError(f"webhook returned {resp.status}: {body[:200]}")
