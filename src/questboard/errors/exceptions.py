"""Custom exception classes for the quest board."""


class QuestBoardError(Exception):
    """Base exception for the quest board."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(QuestBoardError):
    """Field-level or transition-level validation failure."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(QuestBoardError):
    """Resource not found."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class ConflictError(QuestBoardError):
    """Resource state conflict."""

    def __init__(self, message: str):
        super().__init__("CONFLICT", message, status_code=409)


class PersistenceError(QuestBoardError):
    """Storage read or write failure."""

    def __init__(self, message: str, details=None):
        super().__init__("PERSISTENCE_ERROR", message, details, status_code=503)
