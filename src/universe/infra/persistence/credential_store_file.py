import json
import os

from loguru import logger
from pathlib import Path
from typing import Any

from universe.domain.repository.credential_store import CredentialStore


class FileCredentialStore(CredentialStore):
    """Credential slots kept in a JSON file readable only by its owner."""

    def __init__(self, path: str):
        self.path = Path(path)

        super().__init__()

    def load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable credential file {}: {}", self.path, e)
            return {}

        return data if isinstance(data, dict) else {}

    def save(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, ensure_ascii=False, indent=2),
            encoding="utf-8"
        )
        os.chmod(self.path, 0o600)

    def get(self, key: str) -> Any | None:
        return self.load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self.load()
        data[key] = value
        self.save(data)

    def remove(self, key: str) -> None:
        data = self.load()

        if key in data:
            del data[key]
            self.save(data)
