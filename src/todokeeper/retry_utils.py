import logging

from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_exponential

_log = logging.getLogger(__name__)


def retrying_write(*, attempts: int = 3, max_wait: float = 1.0) -> Retrying:
    """
    Retry policy for writes to local storage.

    Only OSError is retried: a full disk or a locked file can clear up between attempts,
    a serialisation error will not.
    """
    return Retrying(
        retry=retry_if_exception_type(OSError),
        wait=wait_exponential(multiplier=0.05, max=max_wait),
        stop=stop_after_attempt(attempts),
        before_sleep=before_sleep_log(_log, logging.INFO),
        # Re-raise the last exception if all retries fail
        reraise=True,
    )
