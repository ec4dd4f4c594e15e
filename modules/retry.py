from dataclasses import dataclass

from modules.config import logger
from modules.utils import random_sleep


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    delay_min: int = 2
    delay_max: int = 5

    @classmethod
    def for_category(cls, category) -> "RetryPolicy":
        delay_min, delay_max = category.retry_delay
        return cls(category.max_retries, delay_min, delay_max)

    @property
    def attempts(self) -> int:
        return max(0, self.max_retries)


def retry(action, policy: RetryPolicy, label="") -> bool:
    """
    Run `action` until it reports success or the policy's attempts run out.

    The action returns a truthy value on success. Raising counts as a failed
    attempt. Every retry waits a fresh random delay from the policy range.
    """
    success = False

    for attempt in range(1, policy.attempts + 1):
        if attempt > 1:
            logger.info(f"{label} Retrying (attempt {attempt}/{policy.attempts})")
            random_sleep(policy.delay_min, policy.delay_max)

        try:
            success = bool(action())
        except Exception as error:
            logger.error(f"{label} Attempt {attempt} failed: {error}")
            success = False

        if success:
            return True

    logger.error(f"{label} Failed after {policy.attempts} attempt(s)")
    return False
