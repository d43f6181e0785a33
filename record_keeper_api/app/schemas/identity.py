"""
Pydantic models for identities and sessions.

An identity is one of the registered people (user or admin).  The set
of identities is fixed at start-up; only the balance changes.  Models
are frozen so a balance update always produces a new instance.
"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


Role = Literal["user", "admin"]

UNKNOWN_USER_NAME = "Unknown User"


def format_balance(balance: float) -> str:
    """Two-decimal display used for balances, e.g. ``$500.00``."""
    return f"${balance:.2f}"


class Identity(BaseModel):
    """Schema for reading an identity from the API."""

    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: str = Field(..., examples=["user1"])
    name: str = Field(..., examples=["John Doe"], description="Display name")
    role: Role = Field("user", examples=["user"])
    balance: float = Field(0.0, examples=[500.0], allow_inf_nan=False)

    @computed_field
    @property
    def balance_display(self) -> str:
        return format_balance(self.balance)


class LoginRequest(BaseModel):
    """Name/id pairing used to sign in.  There is no password."""

    id: str = Field(..., examples=["user1"], description="Identity ID (AOID)")
    name: str = Field(..., examples=["John Doe"])


class BalanceUpdate(BaseModel):
    """New balance for an identity.

    The presentation layer sends whatever the admin typed, so the value
    may arrive as a string.  The field is left untyped and
    ``services.identity_service.parse_balance`` does all the checking,
    booleans included.
    """

    balance: Any = Field(..., examples=["650.00"])


class SessionState(BaseModel):
    """Current state of the process-wide session."""

    authenticated: bool
    user: Optional[Identity] = None
    error: Optional[str] = None
