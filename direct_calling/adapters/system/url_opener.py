"""System URL opener — implements UrlOpener via the host's opener binary."""

import asyncio
import shutil
import subprocess
import sys
from typing import Dict, List, Optional

from direct_calling.domain.errors import ActionFailed


def _log(msg: str):
    print(msg, file=sys.stderr)


def default_opener_command(platform: Optional[str] = None) -> List[str]:
    """Opener argv prefix for the host OS."""
    platform = platform or sys.platform
    if platform == "darwin":
        return ["open"]
    if platform.startswith("win"):
        # "start" is a cmd builtin; the empty string is the window title
        return ["cmd", "/c", "start", ""]
    return ["xdg-open"]


async def _start(cmd_args):
    return await asyncio.create_subprocess_exec(
        *cmd_args,
        stdin=asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )


async def _communicate(proc, timeout: float):
    """Wait for output; a child that outlives the timeout is killed."""
    try:
        return await asyncio.wait_for(proc.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
        await proc.wait()
        raise


class SystemUrlOpener:
    """Hands tel: URLs to whatever the desktop registered for them.

    Handler lookups are cached per scheme. ``refresh`` repeats the lookup
    without blocking the event loop; ``can_open`` only falls back to a
    blocking lookup for a scheme that was never refreshed.
    """

    def __init__(
        self,
        command: Optional[List[str]] = None,
        timeout: float = 10.0,
        platform: Optional[str] = None,
    ):
        self._platform = platform or sys.platform
        self._command = list(command) if command else default_opener_command(self._platform)
        self._timeout = timeout
        self._handlers: Dict[str, bool] = {}

    @property
    def command(self) -> List[str]:
        return list(self._command)

    def _handler_query(self, scheme: str) -> Optional[List[str]]:
        """xdg-mime argv, or None when the answer needs no subprocess."""
        if self._command[0] != "xdg-open" or shutil.which("xdg-mime") is None:
            return None
        # xdg-open succeeds even without a handler, so ask for the handler
        return ["xdg-mime", "query", "default", f"x-scheme-handler/{scheme}"]

    def can_open(self, scheme: str) -> bool:
        if scheme in self._handlers:
            return self._handlers[scheme]
        if shutil.which(self._command[0]) is None:
            answer = False
        else:
            query = self._handler_query(scheme)
            answer = True if query is None else self._query_blocking(query)
        self._handlers[scheme] = answer
        return answer

    async def refresh(self, scheme: str) -> bool:
        """Look the handler up again off the event loop and cache it."""
        if shutil.which(self._command[0]) is None:
            answer = False
        else:
            query = self._handler_query(scheme)
            answer = True if query is None else await self._query(query)
        self._handlers[scheme] = answer
        return answer

    def _query_blocking(self, query: List[str]) -> bool:
        try:
            out = subprocess.run(query, capture_output=True, text=True, timeout=self._timeout)
        except (OSError, subprocess.SubprocessError) as e:
            _log(f"[url_opener] xdg-mime query failed: {e}")
            return False
        return out.returncode == 0 and bool(out.stdout.strip())

    async def _query(self, query: List[str]) -> bool:
        try:
            proc = await _start(query)
            stdout, _stderr = await _communicate(proc, self._timeout)
        except (OSError, asyncio.TimeoutError) as e:
            _log(f"[url_opener] xdg-mime query failed: {e!r}")
            return False
        return proc.returncode == 0 and bool(stdout.decode("utf-8", errors="replace").strip())

    async def open(self, url: str) -> None:
        args = self._command + [url]
        try:
            proc = await _start(args)
        except OSError as e:
            raise ActionFailed(f"Failed to start opener: {e}")
        try:
            _stdout, stderr = await _communicate(proc, self._timeout)
        except asyncio.TimeoutError:
            raise ActionFailed(f"Opener timed out ({self._timeout:g}s)")

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise ActionFailed(f"Opener exit code {proc.returncode}: {detail}")
        _log(f"[url_opener] opened {url}")
