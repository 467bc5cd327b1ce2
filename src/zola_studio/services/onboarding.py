"""First-visit onboarding tour."""

import asyncio
from dataclasses import dataclass, field
from typing import Protocol

TOUR_COMPLETED_KEY = "zola_ai_tour_completed"


class FlagStore(Protocol):
    """Durable string key/value store."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if any."""

    def set(self, key: str, value: str) -> None:
        """Store a value."""


@dataclass
class OnboardingTour:
    """Shows the tour once per installation until it is dismissed."""

    flag_store: FlagStore
    delay_seconds: float = 0.5
    is_active: bool = False
    _pending: asyncio.TimerHandle | None = field(default=None, repr=False)

    def is_completed(self) -> bool:
        """Return True once the tour has been dismissed."""
        return self.flag_store.get(TOUR_COMPLETED_KEY) is not None

    def schedule_if_first_visit(self) -> bool:
        """Activate the tour after a short delay unless it was completed."""
        if self.is_completed() or self.is_active or self._pending is not None:
            return False
        loop = asyncio.get_running_loop()
        self._pending = loop.call_later(self.delay_seconds, self.activate)
        return True

    def activate(self) -> None:
        """Show the tour."""
        self._pending = None
        self.is_active = True

    def open(self) -> None:
        """Show the tour on request, regardless of completion."""
        self.is_active = True

    def cancel(self) -> None:
        """Hide the tour and drop a scheduled activation without completing it."""
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None
        self.is_active = False

    def dismiss(self) -> None:
        """Hide the tour and remember that it was completed."""
        self.cancel()
        self.flag_store.set(TOUR_COMPLETED_KEY, "true")
