"""
Unit tests for ParallelBatchExecutor.
"""

import asyncio

import pytest

from projectlens.shared.infrastructure.parallel import CancellationToken, ParallelBatchExecutor


class TestParallelBatchExecutor:
    """Test ordering, isolation, timeouts and cancellation."""

    @pytest.mark.asyncio
    async def test_results_are_aligned_with_input(self) -> None:
        async def double(value):
            await asyncio.sleep(0.01 * (5 - value))
            return value * 2

        batch = await ParallelBatchExecutor(concurrency_limit=3).execute_batch([1, 2, 3, 4], double)

        assert batch.results == [2, 4, 6, 8]
        assert batch.failures == []
        assert batch.truncated is False

    @pytest.mark.asyncio
    async def test_failures_are_isolated(self) -> None:
        async def fragile(value):
            if value == 2:
                raise ValueError("bad item")
            return value

        batch = await ParallelBatchExecutor().execute_batch([1, 2, 3], fragile)

        assert batch.results == [1, None, 3]
        assert batch.failures == [(1, "bad item")]

    @pytest.mark.asyncio
    async def test_item_timeout(self) -> None:
        async def slow(value):
            await asyncio.sleep(1)
            return value

        batch = await ParallelBatchExecutor(item_timeout=0.01).execute_batch([1], slow)

        assert batch.results == [None]
        assert batch.failures == [(0, "timeout")]

    @pytest.mark.asyncio
    async def test_cancelled_token_skips_items(self) -> None:
        token = CancellationToken()
        token.cancel()

        async def identity(value):
            return value

        batch = await ParallelBatchExecutor(cancel_token=token).execute_batch([1, 2], identity)

        assert batch.skipped == 2
        assert batch.truncated is True
        assert batch.results == [None, None]

    def test_token(self) -> None:
        token = CancellationToken()
        assert token.is_cancelled is False
        token.cancel()
        assert token.is_cancelled is True
