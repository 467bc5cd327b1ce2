"""Authentication, session and onboarding endpoints."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from zola_studio.api.models import (
    LoginRequest,
    OAuthRequest,
    SessionView,
    SignupRequest,
    UserView,
)

if TYPE_CHECKING:
    from zola_studio.containers import AppContainer
    from zola_studio.services.auth import AuthOutcome

router = APIRouter(prefix="/api", tags=["auth"])


@router.get("/session")
async def current_session(request: Request) -> SessionView:
    """Return the projected user and the current location."""
    container: AppContainer = request.app.state.container
    state = container.state
    return SessionView(
        user=UserView.from_user(state.current_user) if state.current_user else None,
        location=container.router.current_path,
        loading=state.loading,
        tour_active=state.tour.is_active,
    )


@router.post("/auth/login")
async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Sign in with email and password."""
    container: AppContainer = request.app.state.container
    outcome = await asyncio.to_thread(
        container.auth_service.sign_in, payload.email, payload.password
    )
    return _outcome_body(outcome)


@router.post("/auth/signup")
async def signup(payload: SignupRequest, request: Request) -> dict[str, object]:
    """Register a new account."""
    container: AppContainer = request.app.state.container
    outcome = await asyncio.to_thread(
        container.auth_service.sign_up,
        payload.email,
        payload.password,
        payload.username,
    )
    return _outcome_body(outcome)


@router.post("/auth/oauth")
async def oauth(payload: OAuthRequest, request: Request) -> dict[str, object]:
    """Start an OAuth sign-in and return the provider URL."""
    container: AppContainer = request.app.state.container
    outcome = await asyncio.to_thread(
        container.auth_service.sign_in_with_oauth, payload.provider
    )
    return _outcome_body(outcome)


@router.post("/auth/logout")
async def logout(request: Request) -> dict[str, str]:
    """Sign out and return to the landing page."""
    container: AppContainer = request.app.state.container
    await container.session_projector.sign_out()
    return {"location": container.router.current_path}


@router.post("/tour/open")
async def open_tour(request: Request) -> dict[str, bool]:
    """Show the onboarding tour (help button)."""
    container: AppContainer = request.app.state.container
    container.state.tour.open()
    return {"tour_active": container.state.tour.is_active}


@router.post("/tour/dismiss")
async def dismiss_tour(request: Request) -> dict[str, bool]:
    """Hide the onboarding tour for good."""
    container: AppContainer = request.app.state.container
    container.state.tour.dismiss()
    return {"tour_active": container.state.tour.is_active}


def _outcome_body(outcome: AuthOutcome) -> dict[str, object]:
    return {
        "error": outcome.error,
        "signup_pending_confirmation": outcome.signup_pending_confirmation,
        "redirect_url": outcome.redirect_url,
    }
