class FinDashError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(FinDashError):
    """Requested dataset category does not exist."""


class DatasetValidationError(FinDashError):
    """Request parameters are malformed (e.g. negative row count)."""
