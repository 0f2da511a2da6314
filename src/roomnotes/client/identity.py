"""Local display-name persistence.

The browser client keeps its username in local storage; this is the same
idea for Python clients: one string in a small JSON file under the home
directory.
"""

import json
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY_PATH = Path.home() / ".roomnotes" / "identity.json"


class MissingIdentityError(Exception):
    """No username stored yet; the caller has to run its entry flow."""


class IdentityStore:
    """Reads and writes the persisted username."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else DEFAULT_IDENTITY_PATH

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable identity file {self.path}: {e}")
            return None
        username = data.get("username") if isinstance(data, dict) else None
        return username or None

    def require(self) -> str:
        username = self.load()
        if not username:
            raise MissingIdentityError(f"No username stored in {self.path}")
        return username

    def save(self, username: str) -> None:
        username = username.strip()
        if not username:
            raise ValueError("Username cannot be empty")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({"username": username}), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
