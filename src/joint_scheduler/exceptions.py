"""
Scheduler error taxonomy
"""


class SchedulerError(Exception):
    """Base exception for scheduling errors"""

    def __init__(self, message: str, error_code: str | None = None):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class InvalidConfigurationError(SchedulerError):
    """Raised when the submitted records cannot be merged or expanded"""

    def __init__(self, message: str, key: str | None = None):
        self.key = key
        if key:
            message = f"Invalid configuration for '{key}': {message}"
        super().__init__(message, "INVALID_CONFIGURATION")


class InternalConsistencyError(SchedulerError):
    """Raised when an engine invariant is violated"""

    def __init__(self, message: str):
        super().__init__(message, "INTERNAL_CONSISTENCY")
