"""
Parallel Batch Executor.

Standardizes per-file parallel work across the analysis stages:
1. Concurrency Control: Semaphore-based limit on in-flight workers.
2. Micro-Timeouts: Each item in the batch has its own timeout.
3. Isolation: Failures in one item do not cascade to others.
4. Cancellation: A cancelled token stops scheduling new items; results
   already produced are kept and the batch is reported as truncated.
"""

from __future__ import annotations

import asyncio
import threading
import time
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from projectlens.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class CancellationToken:
    """Caller-controlled cancellation signal, safe to set from any thread."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()


@dataclass
class BatchResult(Generic[R]):
    """Outcome of a batch: one slot per input item, None when skipped or failed."""

    results: list[R | None] = field(default_factory=list)
    failures: list[tuple[int, str]] = field(default_factory=list)  # (item index, error)
    skipped: int = 0  # Items never started because of cancellation

    @property
    def truncated(self) -> bool:
        return self.skipped > 0


class ParallelBatchExecutor:
    """
    Executes a batch of async tasks with standardized guardrails.

    Workers only return values; callers merge them in a single-threaded
    reduce step after the batch completes.
    """

    def __init__(
        self,
        concurrency_limit: int = 8,
        item_timeout: float = 30.0,
        cancel_token: CancellationToken | None = None,
    ):
        self.concurrency_limit = concurrency_limit
        self.item_timeout = item_timeout
        self.cancel_token = cancel_token

    @property
    def cancelled(self) -> bool:
        return self.cancel_token is not None and self.cancel_token.is_cancelled

    async def execute_batch(
        self,
        items: list[T],
        task_fn: Callable[[T], Coroutine[Any, Any, R]],
        batch_name: str = "batch",
    ) -> BatchResult[R]:
        """
        Executes a function across a list of items in parallel with guardrails.

        Returns:
            BatchResult with results aligned to the input order
        """
        start_time = time.time()
        logger.debug("parallel_batch_started", batch=batch_name, count=len(items))

        semaphore = asyncio.Semaphore(self.concurrency_limit)
        outcome: BatchResult[R] = BatchResult(results=[None] * len(items))

        async def _safe_execute(index: int, item: T) -> None:
            async with semaphore:
                if self.cancelled:
                    outcome.skipped += 1
                    return
                try:
                    outcome.results[index] = await asyncio.wait_for(task_fn(item), timeout=self.item_timeout)
                except asyncio.TimeoutError:
                    logger.warning("parallel_task_timeout", batch=batch_name, index=index)
                    outcome.failures.append((index, "timeout"))
                except Exception as e:
                    logger.warning("parallel_task_failed", batch=batch_name, index=index, error=str(e))
                    outcome.failures.append((index, str(e)))

        await asyncio.gather(*(_safe_execute(index, item) for index, item in enumerate(items)))

        outcome.failures.sort()
        duration = int((time.time() - start_time) * 1000)
        logger.debug(
            "parallel_batch_completed",
            batch=batch_name,
            count=len(items),
            failed=len(outcome.failures),
            skipped=outcome.skipped,
            duration_ms=duration,
        )

        return outcome
