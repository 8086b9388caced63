from typing import Optional
from langchain_core.tools import ToolException


class BoundingBoxError(ToolException):
    """Base class for failures reported back to the agent as tool errors."""
    pass


class InvalidStateError(BoundingBoxError, ValueError):
    """The state name is empty or blank."""

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"State must be a non-empty string, got {state!r}")


class NoBoundingBoxDataError(BoundingBoxError):
    """The store returned zero rows for a state."""

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"No bounding boxes found for state: {state}")


class NullBoundingBoxError(BoundingBoxError):
    """No bounding box came out of the lookup even though no attempt failed."""

    def __init__(self, state: str):
        self.state = state
        super().__init__(f"Bounding boxes data is null for state: {state}")


class LookupExhaustedError(BoundingBoxError):
    """Every lookup attempt for a state errored or came back empty."""

    def __init__(self, state: str, attempts: int, last_error: Optional[BaseException] = None):
        self.state = state
        self.attempts = attempts
        self.last_error = last_error
        reason = str(last_error) if last_error else "no data found"
        super().__init__(
            f"Failed to find a bounding box for state '{state}' after {attempts} attempts: {reason}"
        )

    @property
    def no_data(self) -> bool:
        """True when the last failure was an empty result rather than a transport error."""
        return self.last_error is None or isinstance(self.last_error, NoBoundingBoxDataError)


class BoundingBoxStoreError(RuntimeError):
    """The bounding box store could not be queried."""
    pass


class RetryExhaustedError(Exception):
    """Raised by RetryPolicy when every attempt failed."""

    def __init__(self, attempts: int, last_error: Optional[BaseException] = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Gave up after {attempts} attempts: {last_error}")
