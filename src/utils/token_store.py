import threading
from typing import Optional


class TokenStore:
    """Holds the PIKNDEL bearer token for this process.

    Not persisted: a restart forces a fresh login.
    """

    def __init__(self, token: Optional[str] = None):
        self._token = token
        self._lock = threading.Lock()

    def get(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set(self, token: Optional[str]):
        with self._lock:
            self._token = token

    def clear(self):
        with self._lock:
            self._token = None


token_store = TokenStore()
