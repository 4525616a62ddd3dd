"""Stateless service for video production."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from ...production.base import ProductionError
from ...production.producer import Producer
from ..core.types import BatchResult, Failure, ProductionResult, Result, Success

_logger = logging.getLogger("meme_shorts.production")


class ProducerService:
    """Runs production cycles and reports them as results.

    All state is passed in; the producer is closed after each call.
    """

    async def produce_one(self, producer: Producer) -> Result[ProductionResult]:
        """Produce a single video.

        Returns:
            Success with the new artifact, or Failure with the cycle error.
        """
        try:
            return await self._produce(producer)
        finally:
            await producer.close()

    async def produce_batch(
        self,
        producer: Producer,
        count: int,
        on_item: Optional[Callable[[int, Result[ProductionResult]], None]] = None,
    ) -> BatchResult:
        """Produce ``count`` videos one after another.

        Stops at the first failure; videos already produced stay queued.
        """
        produced: list[Path] = []
        try:
            for index in range(1, count + 1):
                result = await self._produce(producer)
                if on_item:
                    on_item(index, result)
                if isinstance(result, Failure):
                    _logger.error(f"Batch aborted at video {index}/{count}: {result.error}")
                    return BatchResult(produced=produced, failed_at=index, error=result.error)
                produced.append(result.value.output_path)
        finally:
            await producer.close()

        return BatchResult(produced=produced)

    async def _produce(self, producer: Producer) -> Result[ProductionResult]:
        started = time.monotonic()
        try:
            path = await producer.produce()
        except ProductionError as e:
            _logger.error(f"Production failed: {e}")
            return Failure(str(e), {"type": type(e).__name__})
        except OSError as e:
            _logger.error(f"Production failed with I/O error: {e}")
            return Failure(f"I/O error: {e}", {"type": type(e).__name__})

        return Success(ProductionResult(
            output_path=path,
            duration_seconds=time.monotonic() - started,
            pending_count=producer.queue.count(),
        ))
