"""Process-wide location tracking."""

from dataclasses import dataclass, field

from zola_studio.routes import Paths, normalize_path


@dataclass
class Router:
    """Holds the current location and the navigations performed."""

    current_path: str = Paths.LANDING
    history: list[str] = field(default_factory=list)

    def visit(self, url: str) -> None:
        """Record a location reached by the client, without side effects."""
        self.current_path = normalize_path(url)

    def navigate(self, path: str, replace: bool = False) -> None:
        """Move to a new location."""
        if replace and self.history:
            self.history[-1] = path
        else:
            self.history.append(path)
        self.current_path = path
