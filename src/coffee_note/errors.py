"""Application error types."""


class CoffeeNoteError(Exception):
    """Base class for application errors."""


class PreconditionError(CoffeeNoteError, ValueError):
    """Raised when a caller violates a function precondition."""


class ValidationError(CoffeeNoteError, ValueError):
    """Raised when user-supplied record data is invalid."""


class NotFoundError(CoffeeNoteError):
    """Raised when a requested record does not exist."""


class PremiumRequiredError(CoffeeNoteError):
    """Raised when a free-tier account uses a premium feature."""


class VisitLimitReachedError(CoffeeNoteError):
    """Raised when a free-tier account is at its visit cap."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            f"You've reached the {limit} shop limit for free users. "
            "Upgrade to Premium for unlimited visits!"
        )
        self.limit = limit
