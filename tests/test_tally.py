"""Tests for outcome classification and the shared tally."""

import asyncio

import aiohttp
import pytest

from stresser.models import FailureCode, RequestResult
from stresser.tally import ResultTally, classify


def test_classify_uses_status_code() -> None:
    assert classify(RequestResult(status=200, latency=0.1)) == 200
    assert classify(RequestResult(status=503, latency=0.1)) == 503


@pytest.mark.parametrize(
    "error",
    [asyncio.TimeoutError(), TimeoutError(), aiohttp.ServerTimeoutError()],
)
def test_classify_timeouts(error: BaseException) -> None:
    assert classify(RequestResult(error=error)) == FailureCode.TIMEOUT


@pytest.mark.parametrize(
    "error",
    [aiohttp.ClientConnectionError("refused"), aiohttp.InvalidURL("nope"), RuntimeError()],
)
def test_classify_transport_errors(error: BaseException) -> None:
    assert classify(RequestResult(error=error)) == FailureCode.TRANSPORT_ERROR


def test_sentinels_do_not_collide_with_http_codes() -> None:
    assert classify(RequestResult(error=TimeoutError())) != 404
    assert classify(RequestResult(error=aiohttp.ClientError())) != 500


def test_legacy_mapping() -> None:
    assert classify(RequestResult(error=TimeoutError()), legacy_codes=True) == 404
    assert classify(RequestResult(error=aiohttp.ClientError()), legacy_codes=True) == 500
    assert classify(RequestResult(status=201), legacy_codes=True) == 201


async def test_record_increments_count_and_total() -> None:
    tally = ResultTally()

    await tally.record(200, latency=0.5)
    await tally.record(200)
    await tally.record(FailureCode.TIMEOUT)

    assert tally.snapshot() == {200: 2, -1: 1}
    assert tally.total == 3
    assert tally.latencies == [0.5]


async def test_concurrent_records_are_conserved() -> None:
    tally = ResultTally()
    codes = [200, 404, 500, FailureCode.TRANSPORT_ERROR] * 50

    await asyncio.gather(*(tally.record(code) for code in codes))

    assert tally.total == len(codes)
    assert sum(tally.snapshot().values()) == len(codes)
    assert tally.snapshot()[200] == 50


async def test_record_result_returns_code() -> None:
    tally = ResultTally()

    code = await tally.record_result(RequestResult(status=204, latency=0.01))

    assert code == 204
    assert tally.snapshot() == {204: 1}


async def test_snapshot_is_a_copy() -> None:
    tally = ResultTally()
    await tally.record(200)

    snap = tally.snapshot()
    snap[200] = 99

    assert tally.snapshot() == {200: 1}
