"""Error taxonomy for the workspace."""


class ZolaError(Exception):
    """Base class for workspace errors."""


class ValidationError(ZolaError):
    """A required field was empty or malformed."""


class AuthorizationError(ZolaError):
    """An operation required a signed-in owner and none was present."""


class RemoteWriteError(ZolaError):
    """A remote save or delete failed."""


class ProjectionError(ZolaError):
    """Deriving the user from a session event failed."""
