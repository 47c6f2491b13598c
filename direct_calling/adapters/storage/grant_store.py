"""JSON file-based grant storage — implements GrantStore."""

import json
import os
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict


def _log(msg: str):
    print(msg, file=sys.stderr)


class JsonGrantStore:
    """Persists permission grants as ``{permission: {granted, updated_at}}``."""

    def __init__(self, storage_dir: str = "memory", filename: str = "call_permissions.json"):
        self._path = Path(storage_dir) / filename
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> Dict[str, dict]:
        if not self._path.exists():
            return {}
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return raw if isinstance(raw, dict) else {}
        except (OSError, ValueError) as e:
            _log(f"[grant_store] load failed: {e}")
            return {}

    def is_granted(self, permission: str) -> bool:
        entry = self._load().get(permission)
        return isinstance(entry, dict) and entry.get("granted") is True

    def set_granted(self, permission: str, granted: bool) -> None:
        data = self._load()
        data[permission] = {
            "granted": bool(granted),
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        content = json.dumps(data, ensure_ascii=False, indent=2)
        # Atomic write
        fd, tmp_path = tempfile.mkstemp(
            dir=str(self._path.parent), suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_path, str(self._path))
        except BaseException:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise
