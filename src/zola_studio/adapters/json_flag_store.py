"""JSON-file flag store."""

import json
from dataclasses import dataclass
from pathlib import Path

from zola_studio.services.onboarding import FlagStore


@dataclass
class JsonFileFlagStore(FlagStore):
    """Stores string flags in a single JSON object on disk."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the flag value if present."""
        value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        """Write a flag value, creating the file when needed."""
        flags = self._read()
        flags[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(flags, indent=2), encoding="utf-8")

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        return json.loads(self.path.read_text(encoding="utf-8") or "{}")
