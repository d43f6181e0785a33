"""
The process-wide session.

There is exactly one session per running process: it is either
anonymous or holds one authenticated identity.  Signing in checks a
name/id pairing against the ``IdentityStore``; signing out returns to
anonymous.  There is no expiry.

On a successful sign-in the identity is serialized as JSON into a
key‑value slot (``settings.session_key``) so it survives a restart;
signing out clears the slot.  The slot is a convenience: if writing it
fails the session itself still changes state.
"""

import logging
import sqlite3
import threading
from typing import Optional

from pydantic import ValidationError

from ..core.errors import InvalidCredentials
from ..schemas.identity import Identity, SessionState
from .identity_service import IdentityStore
from .slot_service import SlotService


logger = logging.getLogger(__name__)

DEFAULT_SESSION_KEY = "emberUser"


class Session:
    """Single mutable slot holding at most one authenticated identity."""

    def __init__(
        self,
        identities: IdentityStore,
        slots: Optional[SlotService] = None,
        slot_key: str = DEFAULT_SESSION_KEY,
    ) -> None:
        self._identities = identities
        self._slots = slots
        self._slot_key = slot_key
        self._lock = threading.RLock()
        self._current: Optional[Identity] = None
        self._last_error: Optional[str] = None

    @property
    def current(self) -> Optional[Identity]:
        return self._current

    @property
    def is_authenticated(self) -> bool:
        return self._current is not None

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def state(self) -> SessionState:
        with self._lock:
            return SessionState(
                authenticated=self._current is not None,
                user=self._current,
                error=self._last_error,
            )

    def authenticate(self, identity_id: str, name: str) -> Identity:
        """Sign in with a name/id pairing.

        On failure the session becomes anonymous, ``last_error`` holds
        the reason and ``InvalidCredentials`` is raised.
        """
        with self._lock:
            try:
                identity = self._identities.authenticate(identity_id, name)
            except InvalidCredentials as e:
                self._current = None
                self._last_error = e.message
                self._clear_slot()
                raise
            self._current = identity
            self._last_error = None
            self._write_slot(identity)
            return identity

    def end_session(self) -> Optional[Identity]:
        """Sign out.  Returns the identity that was signed in, if any."""
        with self._lock:
            previous = self._current
            self._current = None
            self._last_error = None
            self._clear_slot()
        if previous is not None:
            logger.info("Identity %s signed out", previous.id)
        return previous

    def refresh(self) -> Optional[Identity]:
        """Reload the signed-in identity from the store.

        Keeps the session in step with balance updates made by an admin.
        """
        with self._lock:
            if self._current is None:
                return None
            latest = self._identities.find_by_id(self._current.id)
            if latest is not None and latest != self._current:
                self._current = latest
                self._write_slot(latest)
            return self._current

    def restore(self) -> Optional[Identity]:
        """Rehydrate the session from the slot at start-up.

        The stored identity is only trusted if an identity with the same
        id and name still exists; the live copy from the store is used.
        Anything else clears the slot.
        """
        if self._slots is None:
            return None
        try:
            raw = self._slots.get(self._slot_key)
        except sqlite3.Error as e:
            logger.warning("Could not read session slot: %s", e)
            return None
        if raw is None:
            return None
        try:
            stored = Identity.model_validate_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable session slot")
            self._clear_slot()
            return None
        live = self._identities.find_by_id(stored.id)
        with self._lock:
            if live is None or live.name != stored.name:
                logger.info("Stored session for %s no longer matches an identity", stored.id)
                self._clear_slot()
                return None
            self._current = live
            self._last_error = None
            self._write_slot(live)
        logger.info("Session restored for %s", live.id)
        return live

    def _write_slot(self, identity: Identity) -> None:
        if self._slots is None:
            return
        try:
            self._slots.set(self._slot_key, identity.model_dump_json(exclude={"balance_display"}))
        except sqlite3.Error as e:
            logger.warning("Could not persist session slot: %s", e)

    def _clear_slot(self) -> None:
        if self._slots is None:
            return
        try:
            self._slots.delete(self._slot_key)
        except sqlite3.Error as e:
            logger.warning("Could not clear session slot: %s", e)
