import asyncio

from pixelpond.core.pump import AsyncPump


def drain(pump, limit=10):
    for _ in range(limit):
        if not pump.pending:
            return
        pump.pump()


def test_pump_runs_submitted_coroutines():
    pump = AsyncPump()
    done = []

    async def work():
        await asyncio.sleep(0)
        done.append("ok")

    pump.submit(work())
    assert pump.pending == 1
    drain(pump)
    assert done == ["ok"]
    assert pump.pending == 0
    pump.close()


def test_errors_go_to_handler():
    pump = AsyncPump()
    errors = []

    async def fail():
        raise ValueError("nope")

    pump.submit(fail(), on_error=errors.append)
    drain(pump)
    assert len(errors) == 1
    assert str(errors[0]) == "nope"
    pump.close()


def test_run_until_complete_returns_result():
    pump = AsyncPump()

    async def answer():
        return 42

    assert pump.run_until_complete(answer()) == 42
    pump.close()


def test_close_cancels_pending_work():
    pump = AsyncPump()
    task = pump.submit(asyncio.sleep(3600))
    pump.pump()
    pump.close()
    assert task.cancelled()
    assert pump.loop.is_closed()
    pump.pump()
