"""
Tests for the WorkerLoop: resilience, acking and the stop state machine.
"""

import asyncio

import pytest

from jobs.payload import JobPayload
from worker.loop import WorkerState

from conftest import LONDON


async def _push_raw(fake_redis, queue, raw) -> None:
    await fake_redis.rpush(queue.name, raw)


@pytest.mark.asyncio
async def test_malformed_message_does_not_stop_the_loop(worker, queue, fake_redis, provider, job_store):
    provider.reading(LONDON, temperature=18.0, wind_speed=6.0)
    await _push_raw(fake_redis, queue, b"\x00garbage")
    await queue.push(JobPayload(id="job-good", cities=[LONDON]))

    assert await worker.run_once() is True
    assert await worker.run_once() is True

    assert (await job_store.get("job-good")).status == "success"
    # both messages acked: the bad one is discarded, not parked
    assert await fake_redis.llen(queue.processing_name) == 0
    assert await queue.depth() == 0


@pytest.mark.asyncio
async def test_run_once_on_empty_queue(worker):
    assert await worker.run_once() is False
    assert worker.processed == 0


@pytest.mark.asyncio
async def test_stop_before_run_never_starts(worker):
    worker.stop()
    await worker.run()
    assert worker.state is WorkerState.STOPPED


@pytest.mark.asyncio
async def test_run_drains_queue_until_stopped(worker, queue, provider, job_store):
    provider.reading(LONDON, temperature=18.0, wind_speed=6.0)
    for i in range(3):
        await queue.push(JobPayload(id=f"job-{i}", cities=[LONDON]))

    task = asyncio.create_task(worker.run())
    for _ in range(100):
        if worker.processed == 3:
            break
        await asyncio.sleep(0.02)

    assert worker.state is WorkerState.RUNNING
    worker.stop()
    assert worker.state is WorkerState.STOPPING
    await asyncio.wait_for(task, timeout=3)

    assert worker.state is WorkerState.STOPPED
    for i in range(3):
        assert (await job_store.get(f"job-{i}")).status == "success"


@pytest.mark.asyncio
async def test_run_recovers_jobs_left_by_crashed_worker(worker, queue, fake_redis, provider, job_store):
    provider.reading(LONDON, temperature=18.0, wind_speed=6.0)
    await queue.push(JobPayload(id="job-crashed", cities=[LONDON]))
    await queue.pop_blocking(1)   # popped, never acked

    task = asyncio.create_task(worker.run())
    for _ in range(100):
        if worker.processed == 1:
            break
        await asyncio.sleep(0.02)
    worker.stop()
    await asyncio.wait_for(task, timeout=3)

    assert (await job_store.get("job-crashed")).status == "success"
    assert await fake_redis.llen(queue.processing_name) == 0
