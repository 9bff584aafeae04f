"""Persistent credential store.

The session (tokens, user snapshot, logged-in flag and active team) is one
JSON document under fixed keys, written atomically so the tokens and the
user are always persisted together.  The store performs no network calls.
"""

from __future__ import annotations

import json
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from ..models.user import Credential, UserSummary
from .paths import SESSION_FILE, atomic_write

# Keys of the persisted document.
TOKEN_KEY = "token"
REFRESH_TOKEN_KEY = "refreshToken"
USER_KEY = "user"
IS_LOGGED_IN_KEY = "isLoggedIn"
TEAM_ID_KEY = "teamId"


class CredentialStore:
    """Process-wide session state, hydrated from disk on first access.

    Example::

        store = CredentialStore()
        if store.is_logged_in:
            print(store.user.username)
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else SESSION_FILE
        self._credential: Credential | None = None

    # ------------------------------------------------------------------
    # Hydration
    # ------------------------------------------------------------------

    def load(self) -> Credential:
        """Read the session document, falling back to the logged-out default."""
        self._credential = Credential()
        if not self._path.exists():
            return self._credential
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            self._credential = Credential.model_validate(data)
        except (OSError, ValueError, ValidationError) as exc:
            logger.warning(f"Ignoring unreadable session file {self._path}: {exc}")
            self._credential = Credential()
        return self._credential

    @property
    def credential(self) -> Credential:
        if self._credential is None:
            self.load()
        return self._credential

    @property
    def access_token(self) -> str | None:
        return self.credential.access_token or None

    @property
    def refresh_token(self) -> str | None:
        return self.credential.refresh_token or None

    @property
    def user(self) -> UserSummary | None:
        return self.credential.user

    @property
    def is_logged_in(self) -> bool:
        return self.credential.is_logged_in

    @property
    def team_id(self) -> str | None:
        return self.credential.team_id

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def set_session(
        self,
        access_token: str,
        refresh_token: str | None,
        user: UserSummary | None,
    ) -> None:
        """Store a freshly issued session and mark it logged in."""
        team_id = user.teamId if user is not None else self.credential.team_id
        self._credential = Credential(
            access_token=access_token,
            refresh_token=refresh_token,
            user=user,
            is_logged_in=True,
            team_id=team_id,
        )
        self._save()
        logger.debug("Session stored")

    def set_access_token(self, access_token: str) -> None:
        """Replace the access token after a refresh exchange."""
        self._credential = self.credential.model_copy(update={"access_token": access_token})
        self._save()

    def set_active_team(self, team_id: str | None) -> None:
        self._credential = self.credential.model_copy(update={"team_id": team_id})
        self._save()

    def clear(self) -> None:
        """Forget the session in memory and on disk.  Safe to call repeatedly."""
        self._credential = Credential()
        try:
            if self._path.exists():
                self._path.unlink()
                logger.debug(f"Session removed from {self._path}")
        except OSError as exc:
            logger.error(f"Failed to delete session at {self._path}: {exc}")

    def _save(self) -> None:
        atomic_write(self._path, self.credential.model_dump_json(by_alias=True, indent=2))


_default_store: CredentialStore | None = None


def get_credential_store() -> CredentialStore:
    """Return the process-wide store, creating it on first use."""
    global _default_store
    if _default_store is None:
        _default_store = CredentialStore()
    return _default_store
