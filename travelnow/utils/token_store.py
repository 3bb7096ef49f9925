import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class TokenStore:
    """Keeps the bearer token on disk between runs."""

    def __init__(self, token_file: str = "~/.travelnow/token.json"):
        self.token_file = Path(token_file).expanduser()

    def load(self) -> Optional[str]:
        if not self.token_file.exists():
            return None
        try:
            with open(self.token_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self.token_file, e)
            return None
        return data.get("token") or None

    def save(self, token: str):
        self.token_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.token_file, "w", encoding="utf-8") as f:
            json.dump(
                {"token": token, "saved_at": datetime.now().isoformat()}, f, indent=2
            )
        self.token_file.chmod(0o600)

    def clear(self):
        if self.token_file.exists():
            self.token_file.unlink()


class MemoryTokenStore(TokenStore):
    """Token store for a single process, used by the HTTP facade and tests."""

    def __init__(self, token: Optional[str] = None):
        self.token = token

    def load(self) -> Optional[str]:
        return self.token

    def save(self, token: str):
        self.token = token

    def clear(self):
        self.token = None
