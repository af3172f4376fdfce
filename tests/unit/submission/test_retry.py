"""Tests for the exponential backoff retry policy."""

from unittest.mock import AsyncMock

import httpx
import pytest

from swapcore.errors import NetworkError, RpcError, ValidationError
from swapcore.submission import RetryOptions, is_retryable, with_retry
from tests.helpers import RecordingSleep


def status_error(code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("POST", "https://rpc.test")
    return httpx.HTTPStatusError(
        f"HTTP {code}", request=request, response=httpx.Response(code, request=request)
    )


class CodedError(Exception):
    def __init__(self, message: str, code: str) -> None:
        super().__init__(message)
        self.code = code


class StatusCarrier(Exception):
    def __init__(self, status: int) -> None:
        super().__init__("upstream error")
        self.status = status


NO_JITTER = RetryOptions(max_retries=3, base_delay=5, max_delay=100, backoff_multiplier=2, jitter=0)


class TestRetryOptions:
    """Tests for option validation."""

    def test_defaults(self):
        options = RetryOptions()
        assert options.max_attempts == 4
        assert options.backoff(0) == 1.0
        assert options.backoff(1) == 2.0

    def test_backoff_capped(self):
        options = RetryOptions(base_delay=5, max_delay=20, backoff_multiplier=10)
        assert [options.backoff(i) for i in range(3)] == [5, 20, 20]

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_retries": -1},
            {"base_delay": -1},
            {"backoff_multiplier": 0.5},
            {"jitter": 1.0},
        ],
    )
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RetryOptions(**kwargs)


class TestIsRetryable:
    """Tests for transient failure detection."""

    @pytest.mark.parametrize(
        "error",
        [
            RpcError("rate limited"),
            NetworkError("connection dropped"),
            status_error(429),
            status_error(503),
            StatusCarrier(503),
            httpx.ConnectTimeout("connect timed out"),
            httpx.ConnectError("refused"),
            ConnectionResetError(),
            TimeoutError(),
            CodedError("socket aborted", "ECONNABORTED"),
            RuntimeError("connect ETIMEDOUT 10.0.0.1:443"),
            RuntimeError("Request Timeout"),
            RuntimeError("operation timed out"),
        ],
    )
    def test_retryable(self, error):
        assert is_retryable(error)

    @pytest.mark.parametrize(
        "error",
        [
            ValidationError("Invalid amount"),
            status_error(500),
            status_error(400),
            StatusCarrier(404),
            ValueError("bad input"),
        ],
    )
    def test_not_retryable(self, error):
        assert not is_retryable(error)


class TestWithRetry:
    """Tests for with_retry."""

    @pytest.mark.asyncio
    async def test_first_attempt_succeeds(self):
        sleep = RecordingSleep()
        fn = AsyncMock(return_value="ok")

        assert await with_retry(fn, NO_JITTER, sleep=sleep) == "ok"
        assert fn.await_count == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_third_attempt_succeeds(self):
        """Two transient failures, then success, with delays 5 and 10."""
        sleep = RecordingSleep()
        fn = AsyncMock(side_effect=[TimeoutError(), TimeoutError(), "ok"])

        assert await with_retry(fn, NO_JITTER, sleep=sleep) == "ok"
        assert fn.await_count == 3
        assert sleep.delays == [5, 10]

    @pytest.mark.asyncio
    async def test_exhausted_reraises_last_error(self):
        sleep = RecordingSleep()
        errors = [status_error(429), status_error(503), status_error(429)]
        fn = AsyncMock(side_effect=errors)
        options = RetryOptions(max_retries=2, base_delay=1, jitter=0)

        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await with_retry(fn, options, sleep=sleep)

        assert exc_info.value is errors[-1]
        assert fn.await_count == 3
        assert sleep.delays == [1, 2]

    @pytest.mark.asyncio
    async def test_non_retryable_raised_immediately(self):
        sleep = RecordingSleep()
        error = ValueError("bad input")
        fn = AsyncMock(side_effect=error)

        with pytest.raises(ValueError) as exc_info:
            await with_retry(fn, NO_JITTER, sleep=sleep)

        assert exc_info.value is error
        assert fn.await_count == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_zero_retries(self):
        fn = AsyncMock(side_effect=TimeoutError())
        with pytest.raises(TimeoutError):
            await with_retry(fn, RetryOptions(max_retries=0), sleep=RecordingSleep())
        assert fn.await_count == 1

    @pytest.mark.asyncio
    async def test_jitter_bounds(self):
        fn = AsyncMock(side_effect=[TimeoutError(), "ok"])
        options = RetryOptions(base_delay=1.0, jitter=0.15)

        low = RecordingSleep()
        await with_retry(fn, options, sleep=low, rng=lambda: 0.0)
        assert low.delays == [pytest.approx(0.85)]

        fn = AsyncMock(side_effect=[TimeoutError(), "ok"])
        high = RecordingSleep()
        await with_retry(fn, options, sleep=high, rng=lambda: 0.999999)
        assert high.delays[0] == pytest.approx(1.15, abs=1e-5)

    @pytest.mark.asyncio
    async def test_delay_capped_at_max(self):
        sleep = RecordingSleep()
        fn = AsyncMock(side_effect=[TimeoutError()] * 3 + ["ok"])
        options = RetryOptions(max_retries=3, base_delay=5, max_delay=20, backoff_multiplier=10, jitter=0)

        await with_retry(fn, options, sleep=sleep)

        assert sleep.delays == [5, 20, 20]
