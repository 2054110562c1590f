"""Local session cache for API clients: the issued token and the logged-in user, persisted as JSON."""

import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class SessionCache:
    """
    Token + user persisted in one JSON file.

    The token is opaque here: it is stored and forwarded, never decoded.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.token: str | None = None
        self.user: dict[str, Any] | None = None

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token) and self.user is not None

    def load(self) -> bool:
        """Load a saved session; returns True when both token and user were found."""
        if not self.path.exists():
            return False
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Discarding unreadable session cache %s: %s", self.path, e)
            self.clear()
            return False
        token = data.get("token") if isinstance(data, dict) else None
        user = data.get("user") if isinstance(data, dict) else None
        if not token or not isinstance(user, dict):
            self.clear()
            return False
        self.token = token
        self.user = user
        return True

    def save(self, token: str, user: dict[str, Any]) -> None:
        self.token = token
        self.user = user
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps({"token": token, "user": user}), encoding="utf-8")
        os.replace(tmp, self.path)

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.path.unlink(missing_ok=True)
