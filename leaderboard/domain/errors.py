"""Error taxonomy shared by the validator, repository and HTTP layer."""


class LeaderboardError(Exception):
    """Base class. `message` is safe to show to API clients."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(LeaderboardError):
    """Submitted entry is malformed. Client fault, never logged as an error."""

    status_code = 400


class NotReadyError(LeaderboardError):
    """Storage is not initialized yet, or was lost."""

    status_code = 503

    def __init__(self, message: str = "Database not ready."):
        super().__init__(message)


class StorageError(LeaderboardError):
    """Underlying read, write or schema failure. Never retried."""

    status_code = 500
