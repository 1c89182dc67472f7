"""
Session state and credential persistence.

``SessionState`` is the only place the bearer token and the user secret
live. It is not thread-safe by itself: callers sharing one client between
threads hold ``state.lock`` (or use ``with state:``) around operations.

``JsonSettingsStore`` keeps credentials between runs in a flat JSON file::

    {"bearerToken": "...", "userSecret": "...", "endpoints": {...}}
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Protocol, Union

from ..schemas.bases import Credentials
from ..utils import logger
from .exceptions import ConfigurationError


class SessionState:
    """Mutable bearer token and user secret of one SDK instance."""

    def __init__(self, token: str = "", secret: str = ""):
        self.lock = threading.RLock()
        self._token = token or ""
        self._secret = secret or ""

    def __enter__(self) -> "SessionState":
        self.lock.acquire()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.lock.release()

    @property
    def token(self) -> str:
        return self._token

    @property
    def secret(self) -> str:
        return self._secret

    @property
    def is_authenticated(self) -> bool:
        return bool(self._token)

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or ""

    def set_secret(self, secret: Optional[str]) -> None:
        self._secret = secret or ""

    def clear_token(self) -> None:
        self._token = ""

    def update(self, credentials: Credentials) -> None:
        self._token = credentials.bearer_token
        self._secret = credentials.user_secret

    def credentials(self) -> Credentials:
        return Credentials(bearer_token=self._token, user_secret=self._secret)


class SettingsStore(Protocol):
    """Load/save hooks for persisted settings."""

    def load(self) -> Dict[str, Any]:
        ...

    def save(self, values: Dict[str, Any]) -> None:
        ...


class JsonSettingsStore:
    """
    Settings persisted as one flat JSON object.

    ``save`` amends the full in-memory settings object first and then
    replaces the file in one step, so readers never see a partial write.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._settings: Optional[Dict[str, Any]] = None

    def load(self) -> Dict[str, Any]:
        """
        Read the settings file.

        Returns:
            The stored settings, or an empty dict when the file does not exist.

        Raises:
            ConfigurationError: If the file is not a JSON object.
        """
        if not self.path.exists():
            self._settings = {}
            return {}

        try:
            settings = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Settings file {self.path} is not valid JSON: {e}") from e

        if not isinstance(settings, dict):
            raise ConfigurationError(f"Settings file {self.path} must hold a JSON object")

        self._settings = settings
        return dict(settings)

    def save(self, values: Dict[str, Any]) -> None:
        """
        Merge ``values`` into the settings and write the file atomically.

        Args:
            values: Keys to add or overwrite.
        """
        if self._settings is None:
            self.load()
        settings = {**self._settings, **values}

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(settings, f, indent=4)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

        self._settings = settings
        logger.debug(f"Settings saved to {self.path}")
