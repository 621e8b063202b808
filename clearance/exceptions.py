class ClearanceError(Exception):
    """Base error for clearance evaluation."""


class NotFoundError(ClearanceError):
    def __init__(self, student_id):
        self.student_id = student_id
        super().__init__(f"Student {student_id} not found")


class DataSourceError(ClearanceError):
    """A fee or attendance query failed."""

    def __init__(self, source, cause=None):
        self.source = source
        self.cause = cause
        message = f"Error reading {source}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
