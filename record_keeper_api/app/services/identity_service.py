"""
Business logic for identities.

The ``IdentityStore`` holds the fixed set of identities in memory.
Membership never changes after construction; the only mutation is a
balance update, which replaces the stored ``Identity`` wholesale under
the store lock.  Signing in is a name/id pairing check with no
password; a real deployment would delegate this to an identity
provider.
"""

import logging
import math
import re
import threading
from typing import Any, Iterable, List, Optional

from ..core.errors import InvalidCredentials, NotFound, ValidationFailed
from ..schemas.identity import Identity


logger = logging.getLogger(__name__)

# Optional sign, digits with an optional fraction, optional exponent.
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


# Demo identities loaded when ``settings.seed_demo_data`` is enabled.
SEED_IDENTITIES: List[Identity] = [
    Identity(id="user1", name="John Doe", role="user", balance=500),
    Identity(id="user2", name="Jane Smith", role="user", balance=750),
    Identity(id="admin1", name="Admin User", role="admin", balance=0),
]


def parse_balance(raw: Any) -> float:
    """Parse a balance entered at the presentation layer.

    Accepts JSON numbers or plain decimal strings such as ``"650"``,
    ``"-12.5"`` or ``"1e3"`` (surrounding whitespace is ignored).
    Raises ``ValidationFailed`` for anything else: booleans, ``None``,
    empty strings, Python-only spellings like ``"1_000"``, ``"nan"`` or
    ``"inf"``, and values that overflow to infinity.
    """
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise ValidationFailed("Please enter a valid number.")
    if isinstance(raw, str):
        raw = raw.strip()
        if not _DECIMAL_RE.fullmatch(raw):
            raise ValidationFailed("Please enter a valid number.")
    try:
        value = float(raw)
    except OverflowError:
        raise ValidationFailed("Please enter a valid number.") from None
    if not math.isfinite(value):
        raise ValidationFailed("Please enter a valid number.")
    return value


class IdentityStore:
    """In-memory store for identities.

    Identities are kept in declaration order, which is also the order
    returned by :meth:`list_all`.
    """

    def __init__(self, identities: Optional[Iterable[Identity]] = None) -> None:
        self._lock = threading.RLock()
        self._identities: dict[str, Identity] = {}
        for identity in identities or ():
            if identity.id in self._identities:
                raise ValueError(f"Duplicate identity id {identity.id!r}")
            self._identities[identity.id] = identity

    def __len__(self) -> int:
        return len(self._identities)

    def find_by_id(self, identity_id: str) -> Optional[Identity]:
        """Return the identity with exactly this id, or ``None``."""
        return self._identities.get(identity_id)

    def get(self, identity_id: str) -> Identity:
        identity = self.find_by_id(identity_id)
        if identity is None:
            raise NotFound(f"User {identity_id} not found")
        return identity

    def authenticate(self, identity_id: str, name: str) -> Identity:
        """Check a name/id pairing.

        Both values must match the same stored identity exactly (case
        sensitive).  Raises ``InvalidCredentials`` otherwise.
        """
        identity = self.find_by_id(identity_id)
        if identity is None or identity.name != name:
            logger.info("Rejected sign-in attempt for id %r", identity_id)
            raise InvalidCredentials()
        logger.info("Identity %s authenticated", identity.id)
        return identity

    def list_all(self) -> List[Identity]:
        """Return a snapshot of all identities in declaration order."""
        with self._lock:
            return list(self._identities.values())

    def update_balance(self, identity_id: str, new_balance: float) -> Identity:
        """Replace the balance of one identity.

        The value is validated before anything is touched.  Negative
        balances are accepted; there is no business rule on the amount.

        Raises
        ------
        ValidationFailed
            If ``new_balance`` is not a finite number.
        NotFound
            If the identity does not exist.
        """
        if isinstance(new_balance, bool) or not isinstance(new_balance, (int, float)):
            raise ValidationFailed("Please enter a valid number.")
        if not math.isfinite(new_balance):
            raise ValidationFailed("Please enter a valid number.")
        with self._lock:
            current = self.get(identity_id)
            updated = current.model_copy(update={"balance": float(new_balance)})
            self._identities[identity_id] = updated
        logger.info(
            "Balance of %s updated from %.2f to %.2f",
            identity_id,
            current.balance,
            updated.balance,
        )
        return updated
