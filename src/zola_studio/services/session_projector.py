"""Derive the signed-in user from identity-provider session events."""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Protocol

from zola_studio.domain.errors import ProjectionError
from zola_studio.domain.users import DEFAULT_USERNAME, AuthSession, Profile, User
from zola_studio.routes import Paths, is_public
from zola_studio.services.auth import IdentityProvider, Subscription
from zola_studio.services.navigation import Router
from zola_studio.services.state import AppState

logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Lookup interface for user profiles."""

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the profile for a user, if present."""


@dataclass
class SessionProjector:
    """Keeps ``AppState`` and the router in step with the identity provider.

    Redirects happen only while processing a session event, so rendering a
    page never triggers navigation on its own.
    """

    identity: IdentityProvider
    profiles: ProfileRepository
    state: AppState
    router: Router
    _loop: asyncio.AbstractEventLoop | None = field(default=None, repr=False)
    _subscription: Subscription | None = field(default=None, repr=False)
    _tasks: set[asyncio.Task[object]] = field(default_factory=set, repr=False)
    _generation: int = field(default=0, repr=False)

    async def start(self) -> None:
        """Project the initial session and subscribe to later changes."""
        self._loop = asyncio.get_running_loop()
        session: AuthSession | None = None
        try:
            result = await asyncio.to_thread(self.identity.get_session)
            if result.error:
                logger.error("Error fetching initial session: %s", result.error)
            elif isinstance(result.data, AuthSession):
                session = result.data
        except Exception:
            logger.exception("Error fetching initial session")
        try:
            await self.process_session(session)
        finally:
            self.state.loading = False
        self._subscription = self.identity.on_session_change(
            self.handle_session_change
        )

    def stop(self) -> None:
        """Stop listening for session events."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def handle_session_change(self, event: str, session: AuthSession | None) -> None:
        """Provider callback; hands the session over to the event loop."""
        logger.info("Session event received: %s", event)
        if self._loop is None:
            logger.warning("Session event %s arrived before start", event)
            return
        self._loop.call_soon_threadsafe(self._spawn, self.process_session(session))

    async def process_session(self, session: AuthSession | None) -> User | None:
        """Update state and location for a session, failing closed on errors."""
        self._generation += 1
        if session is None or session.user is None:
            self._project_signed_out()
            return None
        try:
            return await self._project_user(session, self._generation)
        except ProjectionError:
            logger.exception("Error in session processing")
            self._project_signed_out()
            return None

    async def sign_out(self) -> None:
        """Sign out with the provider and reset local state."""
        self._generation += 1
        result = await asyncio.to_thread(self.identity.sign_out)
        if result.error:
            logger.error("Error logging out: %s", result.error)
        self.state.teardown()
        self.router.navigate(Paths.LANDING)

    async def wait_idle(self) -> None:
        """Wait for pending projections."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    async def _project_user(self, session: AuthSession, generation: int) -> User | None:
        auth_user = session.user
        assert auth_user is not None
        profile = await self._fetch_profile(auth_user.id)
        if generation != self._generation:
            logger.info("Dropping superseded session projection for %s", auth_user.id)
            return None
        try:
            email = auth_user.email or ""
            user = User(
                id=auth_user.id,
                email=email,
                username=(profile.username if profile else None)
                or email
                or DEFAULT_USERNAME,
                avatar=profile.avatar_url if profile else None,
            )
            self.state.set_user(user)
            self.state.gallery.schedule_refresh(user.id)
            self.state.collection.schedule_refresh(user.id)

            if is_public(self.router.current_path):
                self.router.navigate(Paths.HOME, replace=True)

            self.state.tour.schedule_if_first_visit()
        except Exception as exc:
            raise ProjectionError(str(exc)) from exc
        return user

    async def _fetch_profile(self, user_id: str) -> Profile | None:
        try:
            return await asyncio.to_thread(self.profiles.get_profile, user_id)
        except Exception as exc:
            logger.warning("Could not fetch user profile on auth change: %s", exc)
            return None

    def _project_signed_out(self) -> None:
        self.state.teardown()
        if not is_public(self.router.current_path):
            self.router.navigate(Paths.LANDING, replace=True)

    def _spawn(self, coro: Coroutine[object, object, object]) -> None:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
