"""
Quick sanity run: hammer one URL with a bounded number of concurrent GETs.
Run: uv run examples/stress_local.py
"""
import asyncio

from stresser import LoadDispatcher, RunConfig, render_report

URL = "https://example.com/"


async def main():
    config = RunConfig(url=URL, total_requests=20, concurrency=5)
    d = LoadDispatcher(config, show_progress=True)
    report = await d.run()
    print(render_report(report))
    print(f"\nPeak in flight: {d.peak_in_flight}")

if __name__ == "__main__":
    asyncio.run(main())
