"""Exceptions raised by the todo store."""


class CalendoError(Exception):
    """Base class for user-facing calendo errors."""


class ValidationError(CalendoError, ValueError):
    """Todo text is empty after trimming."""

    def __init__(self, message: str = "Please enter a todo.") -> None:
        super().__init__(message)


class CapacityError(CalendoError):
    """The day already holds the maximum number of todos."""

    def __init__(self, date_key: str, limit: int) -> None:
        self.date_key = date_key
        self.limit = limit
        super().__init__(f"You can add at most {limit} todos per day ({date_key}).")
