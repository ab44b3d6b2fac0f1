"""
Authentication slice

The two-step login is a closed set of states. Password verification
only ever yields `PendingOtp`; `Authenticated` is reachable solely from
`PendingOtp` through a successful OTP check (or a server sync of an
already authenticated session).
"""
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

User = Dict[str, Any]


class Anonymous(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["anonymous"] = "anonymous"


class PendingOtp(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["pending_otp"] = "pending_otp"
    token: str
    user: Optional[User] = None


class Authenticated(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["authenticated"] = "authenticated"
    token: str
    user: Optional[User] = None


Session = Union[Anonymous, PendingOtp, Authenticated]


class AuthState(BaseModel):
    model_config = ConfigDict(frozen=True)

    session: Session = Field(default_factory=Anonymous, discriminator="kind")
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def is_authenticated(self) -> bool:
        return isinstance(self.session, Authenticated)

    def view(self) -> Dict[str, Any]:
        """Flat shape consumed by the view layer."""
        session = self.session
        authenticated = isinstance(session, Authenticated)
        pending = isinstance(session, PendingOtp)
        return {
            "user": session.user if authenticated else None,
            "token": session.token if authenticated else None,
            "isAuthenticated": authenticated,
            "pendingToken": session.token if pending else None,
            "pendingUser": session.user if pending else None,
            "requiresOtp": pending,
            "isLoading": self.is_loading,
            "error": self.error,
        }


# Actions


class LoginStarted(BaseModel):
    model_config = ConfigDict(frozen=True)


class PasswordVerified(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    user: Optional[User] = None


class OtpVerified(BaseModel):
    """Optional fields override the pending token/user (the backend may rotate the token)."""

    model_config = ConfigDict(frozen=True)

    token: Optional[str] = None
    user: Optional[User] = None


class LoginFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: str


class OtpFailed(BaseModel):
    model_config = ConfigDict(frozen=True)

    error: str


class LoggedOut(BaseModel):
    model_config = ConfigDict(frozen=True)


class UserUpdated(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: User


class ServerSynced(BaseModel):
    """Mirror of what the root loader found in the signed session."""

    model_config = ConfigDict(frozen=True)

    is_authenticated: bool
    token: Optional[str] = None
    user: Optional[User] = None


AuthAction = Union[
    LoginStarted, PasswordVerified, OtpVerified, LoginFailed, OtpFailed, LoggedOut, UserUpdated, ServerSynced
]


def auth_reducer(state: AuthState, action: Any) -> AuthState:
    if isinstance(action, LoginStarted):
        return state.model_copy(update={"is_loading": True, "error": None})

    if isinstance(action, PasswordVerified):
        return AuthState(session=PendingOtp(token=action.token, user=action.user))

    if isinstance(action, OtpVerified):
        session = state.session
        if not isinstance(session, PendingOtp):
            return state
        return AuthState(
            session=Authenticated(token=action.token or session.token, user=action.user or session.user)
        )

    if isinstance(action, LoginFailed):
        return AuthState(error=action.error)

    if isinstance(action, OtpFailed):
        # pending credentials stay so the code can be retried
        return state.model_copy(update={"is_loading": False, "error": action.error})

    if isinstance(action, LoggedOut):
        return AuthState()

    if isinstance(action, UserUpdated):
        session = state.session
        if isinstance(session, Anonymous):
            return state
        merged = {**(session.user or {}), **action.user}
        return state.model_copy(update={"session": session.model_copy(update={"user": merged})})

    if isinstance(action, ServerSynced):
        if action.is_authenticated and action.token:
            return AuthState(session=Authenticated(token=action.token, user=action.user))
        return AuthState()

    return state
