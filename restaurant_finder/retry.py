import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

from restaurant_finder.errors import RetryExhaustedError

# Configure logging
logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class RetryPolicy:
    """
    Bounded retry with no backoff.

    The operation is called with the 1-based attempt number. Any exception
    listed in ``retry_on`` counts as a failed attempt; anything else
    propagates immediately.
    """
    max_attempts: int = 3
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be positive")

    async def run(
        self,
        operation: Callable[[int], Awaitable[T]],
        description: str = "operation"
    ) -> T:
        """
        Run ``operation`` until it succeeds or the attempt budget is spent.

        Args:
            operation: Coroutine function taking the attempt number
            description: Human readable name used in log messages

        Returns:
            The result of the first successful attempt

        Raises:
            RetryExhaustedError: If every attempt failed
        """
        last_error: Optional[BaseException] = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                result = await operation(attempt)
            except self.retry_on as e:
                last_error = e
                logger.warning(f"Attempt {attempt}/{self.max_attempts} of {description} failed: {e}")
                continue
            logger.debug(f"Attempt {attempt}/{self.max_attempts} of {description} succeeded")
            return result

        logger.error(f"Failed after {self.max_attempts} attempts: {last_error}")
        raise RetryExhaustedError(self.max_attempts, last_error)
