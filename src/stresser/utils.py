import time


def now() -> float:
    return time.perf_counter()


# ────────────────────────────────
# Duration Formatting
# ────────────────────────────────


def format_duration(seconds: float) -> str:
    """Human-readable duration: 850.000µs, 12.345ms, 1.500s, 2m3.000s, 1h0m5.000s."""
    if seconds <= 0:
        return "0s"
    if seconds < 1e-3:
        return f"{seconds * 1e6:.3f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    if seconds < 60:
        return f"{seconds:.3f}s"

    minutes, rem = divmod(seconds, 60)
    minutes = int(minutes)
    if minutes < 60:
        return f"{minutes}m{rem:.3f}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h{minutes}m{rem:.3f}s"
