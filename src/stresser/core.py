import asyncio
import logging

import aiohttp
from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)

from .metrics import compute_latency_stats
from .models import RequestResult, RunConfig, RunReport
from .tally import ResultTally
from .utils import now

logger = logging.getLogger(__name__)

PROGRESS_NOTICE = "Making requests, please wait...."


class LoadDispatcher:
    """Fires ``total_requests`` GETs at one URL through a pool of
    ``concurrency`` workers and folds every outcome into a ResultTally.

    ``in_flight`` and ``peak_in_flight`` track how many requests are past
    admission at any moment.
    """

    def __init__(self, config: RunConfig, show_progress: bool = False) -> None:
        self.config = config
        self.show_progress = show_progress

        self.in_flight = 0
        self.peak_in_flight = 0

        logger.info(
            f"Initialized dispatcher for {config.url}: "
            f"requests={config.total_requests}, concurrency={config.concurrency}"
        )

    # ────────────────────────────────
    # HTTP Fetch Logic
    # ────────────────────────────────

    async def _fetch_once(self, session: aiohttp.ClientSession) -> RequestResult:
        url = self.config.url
        start = now()
        try:
            resp = await session.get(url)
        except TimeoutError as e:
            logger.warning(f"Timeout for {url}")
            return RequestResult(error=e)
        except aiohttp.ClientConnectorError as e:
            logger.warning(f"Connection error for {url}: {e}")
            return RequestResult(error=e)
        except aiohttp.ClientError as e:
            logger.warning(f"Request to {url} failed: {e}")
            return RequestResult(error=e)
        except Exception as e:
            logger.error(f"Unexpected error fetching {url}: {e}")
            return RequestResult(error=e)

        status = resp.status
        await self._release(resp)
        latency = now() - start
        logger.debug(f"Fetched {url}: status={status} ({latency:.3f}s)")
        return RequestResult(status=status, latency=latency)

    @staticmethod
    async def _release(resp: aiohttp.ClientResponse) -> None:
        # The status is already known, so a failing drain only gets logged
        try:
            await resp.read()
        except Exception as e:
            logger.warning(f"Error reading response body: {e}")
        finally:
            try:
                resp.release()
            except Exception as e:
                logger.warning(f"Error closing response body: {e}")

    # ────────────────────────────────
    # Main Runner
    # ────────────────────────────────

    async def run(self) -> RunReport:
        cfg = self.config
        tally = ResultTally()

        loop = asyncio.get_running_loop()
        loop.call_soon(print, PROGRESS_NOTICE)

        connector = aiohttp.TCPConnector(limit=0)
        async with aiohttp.ClientSession(connector=connector) as session:
            q: asyncio.Queue[int] = asyncio.Queue()
            for idx in range(cfg.total_requests):
                q.put_nowait(idx)

            progress = None
            task_id = None
            if self.show_progress:
                progress = Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    MofNCompleteColumn(),
                    TimeElapsedColumn(),
                    console=Console(stderr=True),
                    transient=True,
                )
                progress.start()
                task_id = progress.add_task(
                    "[cyan]Requesting...", total=cfg.total_requests
                )

            async def worker(worker_id: int):
                while True:
                    idx = await q.get()
                    self.in_flight += 1
                    self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
                    try:
                        result = await self._fetch_once(session)
                        code = await tally.record_result(result, cfg.legacy_codes)
                        logger.debug(f"[W{worker_id}] Request #{idx} -> {code}")
                        if progress and task_id is not None:
                            progress.advance(task_id)
                    finally:
                        self.in_flight -= 1
                        q.task_done()

            t0 = now()
            logger.info(
                f"Starting {cfg.total_requests} requests with {cfg.concurrency} workers"
            )
            workers = [asyncio.create_task(worker(i)) for i in range(cfg.concurrency)]

            try:
                await q.join()
                elapsed = now() - t0
            finally:
                if progress:
                    progress.stop()
                for w in workers:
                    w.cancel()
                await asyncio.gather(*workers, return_exceptions=True)

        report = RunReport(
            total_completed=tally.total,
            elapsed=elapsed,
            status_counts=tally.snapshot(),
            latencies=tuple(tally.latencies),
        )

        stats = compute_latency_stats(report.latencies)
        if stats is not None:
            logger.info(
                f"Latency: mean={stats.mean:.3f}s, p50={stats.p50:.3f}s, "
                f"p95={stats.p95:.3f}s, max={stats.max:.3f}s"
            )
        logger.info(
            f"Run completed: {report.total_completed} requests in {elapsed:.3f}s"
        )
        return report


async def run_load_test(config: RunConfig, show_progress: bool = False) -> RunReport:
    return await LoadDispatcher(config, show_progress=show_progress).run()
