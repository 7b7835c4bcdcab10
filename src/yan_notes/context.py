"""Process-wide credential and session context.

One instance is created at application start and handed to the transport
and to the session state. Nothing in the package reaches for global state.
"""

import json
from collections.abc import Callable

from loguru import logger

from yan_notes.config import COOKIES_KEY, TENANT_KEY, TOKEN_KEY, USER_KEY
from yan_notes.models.user import User
from yan_notes.protocols import StorageProtocol


class SessionContext:
    """Typed view over the opaque key-value store."""

    def __init__(self, storage: StorageProtocol) -> None:
        self.storage = storage
        self._clear_callbacks: list[Callable[[], None]] = []

    @classmethod
    def init(cls, storage: StorageProtocol) -> "SessionContext":
        """Create the context at application start from persisted storage."""
        ctx = cls(storage)
        user = ctx.user
        logger.debug(
            "Session context loaded: token {}, tenant {!r}, user {!r}",
            "present" if ctx.token else "absent",
            ctx.tenant_code,
            user.username if user else None,
        )
        return ctx

    @property
    def token(self) -> str | None:
        return self.storage.get(TOKEN_KEY) or None

    @token.setter
    def token(self, value: str | None) -> None:
        if value:
            self.storage.set(TOKEN_KEY, value)
        else:
            self.storage.remove(TOKEN_KEY)

    @property
    def tenant_code(self) -> str | None:
        return self.storage.get(TENANT_KEY) or None

    @tenant_code.setter
    def tenant_code(self, value: str | None) -> None:
        if value:
            self.storage.set(TENANT_KEY, value)
        else:
            self.storage.remove(TENANT_KEY)

    @property
    def user(self) -> User | None:
        """Last-known profile of the logged-in user, if any."""
        raw = self.storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return User.from_json(json.loads(raw))
        except (ValueError, KeyError, TypeError):
            logger.warning("Discarding malformed stored user profile")
            self.storage.remove(USER_KEY)
            return None

    @user.setter
    def user(self, value: User | None) -> None:
        if value is None:
            self.storage.remove(USER_KEY)
        else:
            self.storage.set(USER_KEY, json.dumps(value.to_json(), sort_keys=True))

    @property
    def cookies(self) -> dict[str, str]:
        """Server session cookies, kept so a new process can resume the session."""
        raw = self.storage.get(COOKIES_KEY)
        if not raw:
            return {}
        try:
            data = json.loads(raw)
        except ValueError:
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    @cookies.setter
    def cookies(self, value: dict[str, str]) -> None:
        if value:
            self.storage.set(COOKIES_KEY, json.dumps(value, sort_keys=True))
        else:
            self.storage.remove(COOKIES_KEY)

    def on_clear(self, callback: Callable[[], None]) -> None:
        """Register a callback run after every clear()."""
        self._clear_callbacks.append(callback)

    def clear(self) -> None:
        """Forget token, tenant code, profile and cookies together."""
        self.storage.clear()
        for callback in self._clear_callbacks:
            callback()
