from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import IntEnum


class ConfigurationError(ValueError):
    """Raised when a run cannot start because its settings are inconsistent."""


class FailureCode(IntEnum):
    # Negative, so they never collide with an HTTP status
    TIMEOUT = -1
    TRANSPORT_ERROR = -2


# Historical mapping, enabled with --legacy-codes
LEGACY_FAILURE_CODES: dict[FailureCode, int] = {
    FailureCode.TIMEOUT: 404,
    FailureCode.TRANSPORT_ERROR: 500,
}


@dataclass(frozen=True)
class RunConfig:
    url: str
    total_requests: int = 1
    concurrency: int = 1
    legacy_codes: bool = False

    def __post_init__(self) -> None:
        if not self.url:
            raise ConfigurationError("A target URL is required.")
        if self.total_requests < 1:
            raise ConfigurationError("Number of requests must be at least 1.")
        if self.concurrency < 1:
            raise ConfigurationError("Concurrency must be at least 1.")
        if self.concurrency > self.total_requests:
            raise ConfigurationError(
                "Concurrency cannot be greater than the number of requests."
            )


@dataclass
class RequestResult:
    status: int | None = None
    error: BaseException | None = None
    latency: float | None = None


@dataclass(frozen=True)
class RunReport:
    total_completed: int
    elapsed: float
    status_counts: Mapping[int, int]
    latencies: tuple[float, ...] = field(default_factory=tuple)


@dataclass
class LatencyStats:
    count: int
    mean: float
    std: float
    min: float
    max: float
    p50: float
    p90: float
    p95: float
    p99: float
