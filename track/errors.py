"""track error types."""


class TrackError(Exception):
    """Base class for repository errors.

    Attributes:
        message: User-facing error message.
        hint: Optional actionable suggestion.
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.hint = hint


class AlreadyInitialized(TrackError):
    """Raised by ``init`` when the repository needed no setup.

    Informational: callers report it and carry on.
    """


class NotInitialized(TrackError):
    """Raised when an operation needs a repository that was never set up."""

    def __init__(self, missing: str) -> None:
        self.missing = missing
        super().__init__(
            f"Not a track repository (missing {missing})",
            hint="Run 'track init' first.",
        )


class ObjectNotFound(TrackError):
    """Raised when an object id resolves to nothing in the store.

    Attributes:
        oid: The identifier that could not be found.
    """

    def __init__(self, oid: str, message: str | None = None) -> None:
        self.oid = oid
        super().__init__(message or f"Object not found: {oid}")


class MalformedRecord(TrackError):
    """Raised when a stored commit or index record fails validation."""
