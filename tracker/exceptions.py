class TrackerError(Exception):
    """Base exception for attendance tracker rule violations."""


class ValidationError(TrackerError):
    """Raised when user input is rejected, e.g. a blank or duplicate subject name."""


class UnknownActionError(TrackerError, KeyError):
    """Raised when the dispatcher has no handler for an action."""
