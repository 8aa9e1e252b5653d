import asyncio
import functools
import inspect
import time
import logging

logger = logging.getLogger(__name__)

SSL_RETRY_MARKER = "DECRYPTION_FAILED_OR_BAD_RECORD_MAC"
MAX_RETRIES = 3
RETRY_DELAY = 0.5


def _is_retryable(error: Exception, attempt: int) -> bool:
    return SSL_RETRY_MARKER in str(error) and attempt < MAX_RETRIES - 1


def retry_on_ssl_error(func):
    """
    A decorator to retry a storage call if it fails with the intermittent
    SSL DECRYPTION_FAILED_OR_BAD_RECORD_MAC error. Any other error is re-raised.
    Works for both plain and async functions.
    """
    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def async_wrapper(*args, **kwargs):
            for attempt in range(MAX_RETRIES):
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    if not _is_retryable(e, attempt):
                        raise
                    logger.warning(f"SSL error on {func.__name__}. Retrying in {RETRY_DELAY} seconds... (Attempt {attempt + 1}/{MAX_RETRIES})")
                    await asyncio.sleep(RETRY_DELAY)
        return async_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        for attempt in range(MAX_RETRIES):
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if not _is_retryable(e, attempt):
                    raise
                logger.warning(f"SSL error on {func.__name__}. Retrying in {RETRY_DELAY} seconds... (Attempt {attempt + 1}/{MAX_RETRIES})")
                time.sleep(RETRY_DELAY)
    return wrapper
