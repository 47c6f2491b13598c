"""Configuration and shared state."""

__version__ = "0.1.0"

import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

_stderr_print = lambda *a, **kw: print(*a, **kw, file=sys.stderr)

SUPPORTED_PLATFORMS = ("prompted", "url_scheme")
CALL_PLATFORM = os.getenv("CALL_PLATFORM", "prompted").strip().lower()
if CALL_PLATFORM not in SUPPORTED_PLATFORMS:
    _stderr_print(f"Unsupported CALL_PLATFORM={CALL_PLATFORM!r}, falling back to 'prompted'")
    CALL_PLATFORM = "prompted"

SUPPORTED_OVERWRITE_MODES = ("notify", "silent")
PENDING_OVERWRITE_MODE = os.getenv("PENDING_OVERWRITE_MODE", "notify").strip().lower()
if PENDING_OVERWRITE_MODE not in SUPPORTED_OVERWRITE_MODES:
    _stderr_print(
        f"Unsupported PENDING_OVERWRITE_MODE={PENDING_OVERWRITE_MODE!r}, falling back to 'notify'"
    )
    PENDING_OVERWRITE_MODE = "notify"

CONFIG = {
    "port": int(os.getenv("PORT", "3000")),
    "channel_name": "direct_calling",
    "call_platform": CALL_PLATFORM,
    "permission_request_code": int(os.getenv("PERMISSION_REQUEST_CODE", "1001")),
    # "notify": an overwritten pending call fails with OVERWRITTEN
    # "silent": an overwritten pending call never completes
    "pending_overwrite_mode": PENDING_OVERWRITE_MODE,
    # Empty means: pick xdg-open / open / start for the host OS
    "url_opener": os.getenv("URL_OPENER", "").strip(),
    "opener_timeout_seconds": float(os.getenv("OPENER_TIMEOUT_SECONDS", "10")),
    "prompt_webhook_url": os.getenv("PROMPT_WEBHOOK_URL", "").strip(),
    "memory_dir": os.getenv("MEMORY_DIR", "memory"),
}


# ── Typed config ──────────────────────────────────────


@dataclass
class AppConfig:
    """Typed view of CONFIG, passed to the composition root."""

    port: int = 3000
    channel_name: str = "direct_calling"
    call_platform: str = "prompted"
    permission_request_code: int = 1001
    pending_overwrite_mode: str = "notify"
    url_opener: str = ""
    opener_timeout_seconds: float = 10.0
    prompt_webhook_url: str = ""
    memory_dir: str = "memory"

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create AppConfig from environment variables."""
        return cls(
            port=CONFIG["port"],
            channel_name=CONFIG["channel_name"],
            call_platform=CONFIG["call_platform"],
            permission_request_code=CONFIG["permission_request_code"],
            pending_overwrite_mode=CONFIG["pending_overwrite_mode"],
            url_opener=CONFIG["url_opener"],
            opener_timeout_seconds=CONFIG["opener_timeout_seconds"],
            prompt_webhook_url=CONFIG["prompt_webhook_url"],
            memory_dir=CONFIG["memory_dir"],
        )
