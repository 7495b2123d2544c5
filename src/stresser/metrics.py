import math
import logging
from collections.abc import Sequence

from .models import LatencyStats

logger = logging.getLogger(__name__)


def compute_latency_stats(latencies: Sequence[float]) -> LatencyStats | None:
    n = len(latencies)
    if n == 0:
        logger.debug("No latencies recorded. Skipping latency stats.")
        return None

    mean = sum(latencies) / n
    sum_sq = sum(x * x for x in latencies)
    std = math.sqrt(max(0.0, (sum_sq / n) - (mean * mean)))

    sl = sorted(latencies)

    def pct(p):
        return sl[max(0, min(n - 1, int(p * (n - 1))))]

    stats = LatencyStats(
        count=n,
        mean=mean,
        std=std,
        min=sl[0],
        max=sl[-1],
        p50=pct(0.50),
        p90=pct(0.90),
        p95=pct(0.95),
        p99=pct(0.99),
    )
    logger.debug(
        f"Latency stats computed: n={n}, mean={mean:.3f}s, p95={stats.p95:.3f}s"
    )
    return stats
