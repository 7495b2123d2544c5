import asyncio
import logging
from collections import defaultdict

from .models import LEGACY_FAILURE_CODES, FailureCode, RequestResult

logger = logging.getLogger(__name__)


def classify(result: RequestResult, legacy_codes: bool = False) -> int:
    """Map one request result to the outcome code it is tallied under."""
    if result.status is not None:
        return result.status

    # aiohttp.ServerTimeoutError and asyncio.TimeoutError are both TimeoutError
    if isinstance(result.error, TimeoutError):
        failure = FailureCode.TIMEOUT
    else:
        failure = FailureCode.TRANSPORT_ERROR

    if legacy_codes:
        return LEGACY_FAILURE_CODES[failure]
    return int(failure)


class ResultTally:
    """Outcome counts for a single run, shared by every worker."""

    def __init__(self) -> None:
        self.counts: dict[int, int] = defaultdict(int)
        self.total = 0
        self.latencies: list[float] = []
        self._lock = asyncio.Lock()

    async def record(self, code: int, latency: float | None = None) -> None:
        async with self._lock:
            self._apply(code, latency)

    async def record_result(
        self, result: RequestResult, legacy_codes: bool = False
    ) -> int:
        async with self._lock:
            code = classify(result, legacy_codes)
            self._apply(code, result.latency)
        return code

    def _apply(self, code: int, latency: float | None) -> None:
        self.counts[code] += 1
        self.total += 1
        if latency is not None:
            self.latencies.append(latency)
        logger.debug(f"Recorded outcome {code} (total={self.total})")

    def snapshot(self) -> dict[int, int]:
        return dict(self.counts)
