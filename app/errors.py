class ValidationError(ValueError):
    """Input was missing or malformed; nothing was written."""


class NotFoundError(ValueError):
    """The requested member (or related row) does not exist."""


class StorageError(RuntimeError):
    """The database rejected or failed a write for a non-validation reason."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Failed to {action}. Please try again.")
