"""JSON file storage for the state document."""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from sehat_sense.services.store import StateStorage


@dataclass
class JsonFileStateStorage(StateStorage):
    """Stores the state document as ``<namespace>.json`` under a data directory."""

    data_dir: Path
    namespace: str = "sehatSenseData"

    @property
    def path(self) -> Path:
        """Return the file backing this namespace."""
        return self.data_dir / f"{self.namespace}.json"

    def read(self) -> dict[str, object] | None:
        """Return the stored payload, or ``None`` if the file does not exist."""
        if not self.path.exists():
            return None
        payload = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(payload, dict):
            raise ValueError("State file does not contain a JSON object")
        return payload

    def write(self, payload: dict[str, object]) -> None:
        """Atomically replace the state file."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.data_dir, prefix=f".{self.namespace}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
