"""Process-wide workspace state."""

from dataclasses import dataclass

from zola_studio.domain.errors import AuthorizationError
from zola_studio.domain.users import User
from zola_studio.services.onboarding import OnboardingTour
from zola_studio.services.reconciler import CollectionAssetList, GalleryAssetList


@dataclass
class AppState:
    """Single owner of the signed-in user and the asset lists."""

    gallery: GalleryAssetList
    collection: CollectionAssetList
    tour: OnboardingTour
    current_user: User | None = None
    loading: bool = True

    @property
    def owner_id(self) -> str:
        """Return the signed-in user id or raise AuthorizationError."""
        return self.require_user().id

    def require_user(self) -> User:
        """Return the signed-in user or raise AuthorizationError."""
        if self.current_user is None:
            raise AuthorizationError("You must be logged in.")
        return self.current_user

    def set_user(self, user: User) -> None:
        """Install the projected user."""
        self.current_user = user

    def teardown(self) -> None:
        """Forget the user, the cached lists and any scheduled tour."""
        self.current_user = None
        self.tour.cancel()
        self.gallery.clear()
        self.collection.clear()
