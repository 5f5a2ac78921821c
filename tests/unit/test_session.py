"""
Tests for the shared solver session and its provider.
"""
import asyncio

import pytest
import z3

from fieldcheck.solver import SessionProvider, SolverResult, SolverSession, Z3Solver


@pytest.mark.asyncio
async def test_provider_creates_session_once_under_concurrency():
    created = []

    async def slow_factory():
        created.append(1)
        await asyncio.sleep(0.01)
        return Z3Solver()

    provider = SessionProvider(slow_factory)

    sessions = await asyncio.gather(*(provider.get() for _ in range(10)))

    assert len(created) == 1
    assert provider.created == 1
    assert all(s is sessions[0] for s in sessions)


@pytest.mark.asyncio
async def test_provider_is_lazy():
    provider = SessionProvider()

    assert provider.session is None
    session = await provider.get()
    assert isinstance(session, SolverSession)
    assert provider.session is session


@pytest.mark.asyncio
async def test_provider_discard():
    provider = SessionProvider()

    first = await provider.get()
    provider.discard()
    second = await provider.get()

    assert first is not second
    assert provider.created == 2


@pytest.mark.asyncio
async def test_scope_isolates_assertions():
    session = await SessionProvider().get()
    x = z3.Int('x')

    async with session.scope():
        session.add(x > 10)
        session.add(x < 5)
        result = await session.check()
        assert result.result == SolverResult.UNSAT

    async with session.scope():
        session.add(x == 3)
        result = await session.check()
        assert result.result == SolverResult.SAT
        assert result.model == {'x': 3}


@pytest.mark.asyncio
async def test_scope_pops_on_error():
    session = await SessionProvider().get()

    with pytest.raises(RuntimeError):
        async with session.scope():
            session.add(z3.Bool('flag'))
            raise RuntimeError("boom")

    assert session.backend.num_scopes() == 0


@pytest.mark.asyncio
async def test_frame_nests_inside_scope():
    session = await SessionProvider().get()
    x = z3.Int('x')

    async with session.scope():
        session.add(x > 0)
        with session.frame():
            session.add(x < 0)
            assert (await session.check()).result == SolverResult.UNSAT
        assert (await session.check()).result == SolverResult.SAT


@pytest.mark.asyncio
async def test_session_requires_scope():
    session = await SessionProvider().get()

    with pytest.raises(RuntimeError):
        session.add(z3.Bool('flag'))
    with pytest.raises(RuntimeError):
        await session.check()


@pytest.mark.asyncio
async def test_concurrent_scopes_do_not_interleave():
    session = await SessionProvider().get()
    x = z3.Int('x')
    order = []

    async def job(name, constraint):
        async with session.scope():
            order.append(f"{name}-start")
            session.add(constraint)
            result = await session.check()
            order.append(f"{name}-end")
            return result.result

    results = await asyncio.gather(job("a", x > 1), job("b", x < 1))

    assert results == [SolverResult.SAT, SolverResult.SAT]
    assert order == ["a-start", "a-end", "b-start", "b-end"]


@pytest.mark.asyncio
async def test_session_rejects_other_tasks_while_scope_is_held():
    session = await SessionProvider().get()
    entered = asyncio.Event()
    release = asyncio.Event()

    async def holder():
        async with session.scope():
            entered.set()
            await release.wait()

    task = asyncio.create_task(holder())
    await entered.wait()

    with pytest.raises(RuntimeError):
        session.add(z3.Bool('flag'))
    with pytest.raises(RuntimeError):
        await session.check()

    release.set()
    await task
    assert session.backend.num_scopes() == 0


def test_session_usable_from_successive_event_loops():
    provider = SessionProvider()
    x = z3.Int('x')

    async def run():
        session = await provider.get()

        async def job(bound):
            async with session.scope():
                session.add(x > bound)
                return (await session.check()).result

        return await asyncio.gather(job(1), job(2), job(3))

    assert asyncio.run(run()) == [SolverResult.SAT] * 3
    assert asyncio.run(run()) == [SolverResult.SAT] * 3
    assert provider.created == 1
