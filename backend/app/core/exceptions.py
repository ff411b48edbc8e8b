class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class ScheduleError(AppError):
    """Raised when a schedule request cannot be turned into a grid."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class InvalidDateRangeError(ScheduleError):
    """Raised when a requested date window ends before it starts."""
    def __init__(self, start_date, end_date):
        super().__init__(
            f"start_date {start_date} is after end_date {end_date}",
            details={"start_date": str(start_date), "end_date": str(end_date)},
        )

class InvalidViewModeError(ScheduleError):
    """Raised for a view mode other than day or week."""
    def __init__(self, mode):
        super().__init__(
            f"Unsupported view mode '{mode}'",
            details={"view": str(mode), "allowed": ["day", "week"]},
        )

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)
