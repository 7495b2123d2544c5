__all__ = [
    "LoadDispatcher",
    "run_load_test",
    "ResultTally",
    "classify",
    "RunConfig",
    "RunReport",
    "ConfigurationError",
    "FailureCode",
    "render_report",
    "render_latency_histogram",
]


from .core import LoadDispatcher, run_load_test
from .models import ConfigurationError, FailureCode, RunConfig, RunReport
from .rendering import render_latency_histogram, render_report
from .tally import ResultTally, classify
