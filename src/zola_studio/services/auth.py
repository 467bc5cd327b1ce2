"""Sign-in, sign-up and OAuth flows."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from zola_studio.domain.errors import ValidationError
from zola_studio.domain.users import AuthResult, AuthSession, AuthUser

SessionCallback = Callable[[str, AuthSession | None], None]


class Subscription(Protocol):
    """Handle returned by a session-change subscription."""

    def unsubscribe(self) -> None:
        """Stop receiving session events."""


class IdentityProvider(Protocol):
    """Interface for the external identity/session provider."""

    def get_session(self) -> AuthResult:
        """Return the current session as ``data``."""

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        """Invoke ``callback(event, session)`` on every session change."""

    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""

    def sign_up(self, email: str, password: str, username: str) -> AuthResult:
        """Register a user; ``data`` is ``(AuthUser | None, AuthSession | None)``."""

    def sign_out(self) -> AuthResult:
        """End the current session."""

    def sign_in_with_oauth(self, provider: str, redirect_to: str) -> AuthResult:
        """Start an OAuth sign-in; ``data`` is the redirect URL."""


@dataclass(frozen=True)
class AuthOutcome:
    """Result of an auth form submission."""

    error: str | None = None
    signup_pending_confirmation: bool = False
    redirect_url: str | None = None


@dataclass
class AuthService:
    """Validates auth forms and forwards them to the identity provider.

    Navigation after a successful sign-in is left to the session projector,
    which reacts to the provider's session event.
    """

    identity: IdentityProvider
    site_url: str

    def sign_in(self, email: str, password: str) -> AuthOutcome:
        """Sign in with email and password."""
        _require_credentials(email, password)
        result = self.identity.sign_in_with_password(email, password)
        return AuthOutcome(error=result.error)

    def sign_up(self, email: str, password: str, username: str) -> AuthOutcome:
        """Register a new account."""
        _require_credentials(email, password)
        if not username.strip():
            raise ValidationError("Username cannot be empty.")
        result = self.identity.sign_up(email, password, username)
        if result.error:
            return AuthOutcome(error=result.error)
        user, session = _unpack_signup(result.data)
        return AuthOutcome(
            signup_pending_confirmation=user is not None
            and (not user.identities or session is None)
        )

    def sign_in_with_oauth(self, provider: str = "google") -> AuthOutcome:
        """Start an OAuth sign-in that returns to the site root."""
        result = self.identity.sign_in_with_oauth(provider, self.site_url)
        if result.error:
            return AuthOutcome(
                error=f"{provider.capitalize()} sign-in error: {result.error}"
            )
        return AuthOutcome(redirect_url=str(result.data) if result.data else None)


def _require_credentials(email: str, password: str) -> None:
    if not email.strip() or not password.strip():
        raise ValidationError("Email and password cannot be empty.")


def _unpack_signup(data: object) -> tuple[AuthUser | None, AuthSession | None]:
    if isinstance(data, tuple) and len(data) == 2:
        user, session = data
        return user, session
    return None, None
