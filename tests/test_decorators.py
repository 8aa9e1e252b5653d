"""Tests for the storage retry decorator."""
from unittest.mock import AsyncMock, patch

import pytest

from config.decorators import retry_on_ssl_error

SSL_ERROR = Exception("[SSL: DECRYPTION_FAILED_OR_BAD_RECORD_MAC] decryption failed or bad record mac")


class TestRetryOnSslError:

    @pytest.mark.asyncio
    async def test_async_retries_ssl_error(self):
        outcomes = [SSL_ERROR, {"id": "p1"}]
        calls = []

        @retry_on_ssl_error
        async def find_project():
            calls.append(1)
            outcome = outcomes.pop(0)
            if isinstance(outcome, Exception):
                raise outcome
            return outcome

        with patch("config.decorators.asyncio.sleep", new=AsyncMock()):
            assert await find_project() == {"id": "p1"}
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_async_other_errors_are_not_retried(self):
        calls = []

        @retry_on_ssl_error
        async def insert_screen():
            calls.append(1)
            raise ValueError("bad column")

        with pytest.raises(ValueError):
            await insert_screen()
        assert len(calls) == 1

    def test_sync_gives_up_after_three_attempts(self):
        calls = []

        @retry_on_ssl_error
        def insert_history():
            calls.append(1)
            raise SSL_ERROR

        with patch("config.decorators.time.sleep"):
            with pytest.raises(Exception, match="DECRYPTION_FAILED"):
                insert_history()
        assert len(calls) == 3
