"""
Centralized rate limit management for GitHub API requests.
Provides throttling based on the quota PyGithub reads from X-RateLimit headers.
"""

import time
from dataclasses import dataclass

from github import Github
from loguru import logger


class RateLimitExceeded(Exception):
    """Raised when the remaining quota is inside the safety buffer."""

    def __init__(self, message: str, wait_seconds: float):
        super().__init__(message)
        self.wait_seconds = wait_seconds


@dataclass
class RateLimitStatus:
    """Current rate limit status from GitHub API."""

    limit: int  # Total requests allowed per hour
    remaining: int  # Requests remaining in current window
    reset_time: int  # Unix timestamp when limit resets

    @property
    def expired(self) -> bool:
        """True once the window this status describes has reset."""
        return self.reset_time <= time.time()

    @property
    def used(self) -> int:
        """Requests used in current window."""
        return self.limit - self.remaining

    @property
    def usage_percentage(self) -> float:
        """Percentage of rate limit used (0.0 to 1.0)."""
        if self.limit == 0:
            return 0.0
        return (self.limit - self.remaining) / self.limit

    @property
    def minutes_until_reset(self) -> float:
        """Minutes until rate limit resets."""
        return max(0, (self.reset_time - time.time()) / 60)

    @property
    def requests_per_minute_remaining(self) -> float:
        """Safe requests per minute based on remaining quota."""
        if self.minutes_until_reset <= 0:
            return float(self.remaining)
        return self.remaining / self.minutes_until_reset


class RateLimitManager:
    """
    Manages GitHub API rate limiting with throttling between requests.

    Shared by every release source in the process so quota awareness carries
    across repositories.
    """

    def __init__(self, safety_buffer: int = 10, min_requests_threshold: int = 50):
        """
        Initialize rate limit manager.

        Args:
            safety_buffer: Number of requests to keep in reserve
            min_requests_threshold: Minimum requests before aggressive throttling
        """
        self.safety_buffer = safety_buffer
        self.min_requests_threshold = min_requests_threshold
        self.last_status: RateLimitStatus | None = None
        self.last_request_time = 0.0

    def record_status(self, github: Github) -> RateLimitStatus | None:
        """
        Record the quota PyGithub captured from the most recent response.

        Args:
            github: Client that has already issued at least one request

        Returns:
            RateLimitStatus object or None if the values are unusable
        """
        try:
            remaining, limit = github.rate_limiting
            reset_time = int(github.rate_limiting_resettime)
        except (TypeError, ValueError) as e:
            logger.warning(f"Failed to read rate limit status: {e}")
            return None

        if limit < 0:
            return None

        status = RateLimitStatus(
            limit=limit, remaining=remaining, reset_time=reset_time
        )
        self.last_status = status
        logger.debug(self.format_status_summary())
        return status

    def current_status(self) -> RateLimitStatus | None:
        """
        Last recorded status, or None once its window has reset.

        An expired status is dropped so the next request goes out and records
        the fresh quota.
        """
        if self.last_status is not None and self.last_status.expired:
            logger.debug("Rate limit window has reset, discarding recorded status")
            self.last_status = None
        return self.last_status

    def calculate_delay(self, status: RateLimitStatus | None = None) -> float:
        """
        Calculate appropriate delay before next request.

        Args:
            status: Current rate limit status, uses last known if None

        Returns:
            Delay in seconds before next request
        """
        if status is None:
            status = self.current_status()

        if status is None:
            # Nothing observed yet
            return 0.0

        if status.remaining <= self.safety_buffer:
            if status.minutes_until_reset > 0:
                delay = (status.minutes_until_reset * 60) / max(1, status.remaining)
                return min(delay, 300)
            return 5.0

        if status.remaining < self.min_requests_threshold:
            safe_rate = status.requests_per_minute_remaining * 0.8
            if safe_rate > 0:
                return min(60 / safe_rate, 60)
            return 30.0

        usage_pct = status.usage_percentage
        if usage_pct < 0.5:
            return 0.0
        elif usage_pct < 0.8:
            return (usage_pct - 0.5) * 4
        else:
            return 1.0 + (usage_pct - 0.8) * 10

    def wait_if_needed(self, tool_name: str = "unknown") -> None:
        """
        Wait appropriate amount of time before next request.

        Args:
            tool_name: Name of tool making the request for better logging
        """
        delay = self.calculate_delay()
        time_elapsed = time.time() - self.last_request_time
        adjusted_delay = max(0, delay - time_elapsed)

        if adjusted_delay > 0:
            logger.debug(f"[{tool_name}] Rate limiting: waiting {adjusted_delay:.1f}s")
            time.sleep(adjusted_delay)

        self.last_request_time = time.time()

    def should_pause_operations(self) -> tuple[bool, float]:
        """
        Check if operations should be paused due to rate limit exhaustion.

        Returns:
            Tuple of (should_pause, recommended_wait_time_seconds)
        """
        status = self.current_status()
        if status is None:
            return False, 0

        if status.remaining <= self.safety_buffer:
            wait_time = status.minutes_until_reset * 60
            return True, min(wait_time, 3600)

        return False, 0

    def ensure_quota(self) -> None:
        """
        Raise if the remaining quota is exhausted.

        Raises:
            RateLimitExceeded: If requests should pause until the window resets
        """
        should_pause, wait_time = self.should_pause_operations()
        if should_pause:
            raise RateLimitExceeded(
                f"Rate limit exhausted. Please wait {wait_time / 60:.1f} minutes "
                f"before continuing. {self.format_status_summary()}",
                wait_time,
            )

    def format_status_summary(self) -> str:
        """Get a formatted summary of current rate limit status."""
        if self.last_status is None:
            return "Rate limit status: Unknown"

        status = self.last_status
        return (
            f"Rate limit: {status.remaining}/{status.limit} remaining "
            f"({status.usage_percentage:.1%} used), "
            f"resets in {status.minutes_until_reset:.1f} minutes"
        )


# Global rate limit manager instance for project-wide use
global_rate_limit_manager = RateLimitManager()
