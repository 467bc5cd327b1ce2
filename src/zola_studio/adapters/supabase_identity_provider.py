"""Supabase Auth adapter for the identity provider interface."""

from dataclasses import dataclass

from supabase import AuthError, Client

from zola_studio.domain.users import AuthResult, AuthSession, AuthUser
from zola_studio.services.auth import IdentityProvider, SessionCallback, Subscription


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Wraps ``Client.auth`` and turns raised auth errors into ``error`` fields."""

    client: Client

    def get_session(self) -> AuthResult:
        """Return the stored session, if any."""
        try:
            session = self.client.auth.get_session()
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult(data=to_auth_session(session))

    def on_session_change(self, callback: SessionCallback) -> Subscription:
        """Subscribe to Supabase auth state changes."""

        def _forward(event: object, session: object) -> None:
            callback(str(event), to_auth_session(session))

        return self.client.auth.on_auth_state_change(_forward)

    def sign_in_with_password(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult(data=to_auth_session(response.session))

    def sign_up(self, email: str, password: str, username: str) -> AuthResult:
        """Register a user with the username stored in user metadata."""
        try:
            response = self.client.auth.sign_up(
                {
                    "email": email,
                    "password": password,
                    "options": {"data": {"username": username}},
                }
            )
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult(
            data=(to_auth_user(response.user), to_auth_session(response.session))
        )

    def sign_out(self) -> AuthResult:
        """Sign out the current session."""
        try:
            self.client.auth.sign_out()
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult()

    def sign_in_with_oauth(self, provider: str, redirect_to: str) -> AuthResult:
        """Return the provider URL the browser should be sent to."""
        try:
            response = self.client.auth.sign_in_with_oauth(
                {"provider": provider, "options": {"redirect_to": redirect_to}}
            )
        except AuthError as exc:
            return AuthResult(error=exc.message)
        return AuthResult(data=response.url)


def to_auth_user(user: object | None) -> AuthUser | None:
    """Convert a Supabase user object."""
    if user is None:
        return None
    identities = getattr(user, "identities", None) or []
    return AuthUser(
        id=str(user.id),  # type: ignore[attr-defined]
        email=getattr(user, "email", None),
        identities=[
            {
                "id": getattr(identity, "id", None),
                "provider": getattr(identity, "provider", None),
            }
            for identity in identities
        ],
    )


def to_auth_session(session: object | None) -> AuthSession | None:
    """Convert a Supabase session object."""
    if session is None:
        return None
    return AuthSession(
        user=to_auth_user(getattr(session, "user", None)),
        access_token=getattr(session, "access_token", None),
    )
