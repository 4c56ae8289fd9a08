class CrewtimeError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(CrewtimeError):
    """Requested resource does not exist."""


class ConflictError(CrewtimeError):
    """Operation conflicts with existing state (e.g. duplicate timesheet)."""


class ForbiddenError(CrewtimeError):
    """Caller did not present the expected API key."""


class InvalidEntryError(CrewtimeError):
    """Time entries failed validation; ``violations`` lists each problem."""

    def __init__(self, message: str, violations: list | None = None) -> None:
        super().__init__(message)
        self.violations = violations or []
