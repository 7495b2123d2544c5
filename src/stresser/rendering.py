from .models import RunReport
from .utils import format_duration


def render_report(report: RunReport) -> str:
    lines = [
        "Report:",
        f"Total requests: {report.total_completed}",
        f"Time taken: {format_duration(report.elapsed)}",
        "Status code distribution:",
    ]
    for code in sorted(report.status_counts):
        lines.append(f"[{code}] {report.status_counts[code]} requests")
    return "\n".join(lines)


def render_latency_histogram(latencies: list[float], bins: int = 20) -> str:
    if not latencies:
        return "No latency data."
    lo, hi = min(latencies), max(latencies)
    if hi <= lo:
        return f"Histogram: single value {lo:.4f}s"

    width = 40
    counts = [0] * bins
    for x in latencies:
        j = int((x - lo) / (hi - lo) * bins)
        if j == bins:
            j -= 1
        counts[j] += 1

    peak = max(counts)
    lines = []
    for i, c in enumerate(counts):
        left = lo + (hi - lo) * (i / bins)
        right = lo + (hi - lo) * ((i + 1) / bins)
        bar = "#" * max(1, int((c / peak) * width)) if c else ""
        lines.append(f"{left:.3f}s - {right:.3f}s | {bar} ({c})")
    return "Latency Histogram\n" + "\n".join(lines)
