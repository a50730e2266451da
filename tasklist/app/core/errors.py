from typing import Optional


class TodoStoreError(Exception):
    """Raised when a write against the todo store fails."""

    def __init__(self, message: str, *, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class StoreUnavailableError(TodoStoreError):
    """Raised when the store cannot be reached while the app is starting."""
