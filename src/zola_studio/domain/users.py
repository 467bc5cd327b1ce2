"""Domain models for users and identity sessions."""

from dataclasses import dataclass, field

DEFAULT_USERNAME = "ghost_user"


@dataclass(frozen=True)
class User:
    """Signed-in user as seen by the rest of the application."""

    id: str
    email: str
    username: str
    avatar: str | None = None


@dataclass(frozen=True)
class Profile:
    """Optional profile record stored alongside the identity."""

    username: str | None
    avatar_url: str | None


@dataclass(frozen=True)
class AuthUser:
    """User portion of an identity-provider session."""

    id: str
    email: str | None
    identities: list[dict[str, object]] = field(default_factory=list)


@dataclass(frozen=True)
class AuthSession:
    """Identity-provider session."""

    user: AuthUser | None
    access_token: str | None = None


@dataclass(frozen=True)
class AuthResult:
    """Provider call result in `{data, error}` shape."""

    data: object | None = None
    error: str | None = None
