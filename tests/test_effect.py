"""Tests for Effect: construction, chain, catch, run and re-execution."""

import asyncio

import pytest
from triad import Effect, Ok, Panic, effect, panic


class TestEffectConstruction:
    """Tests for from_, from_async and unit."""

    @pytest.mark.asyncio
    async def test_from_constant(self):
        """A constant resolves to itself."""
        assert await Effect.from_(42).run() == 42

    @pytest.mark.asyncio
    async def test_from_async(self):
        """from_async and effect() run the coroutine function."""

        async def hello() -> str:
            return 'hello'

        assert await Effect.from_async(hello).run() == 'hello'
        assert await effect(hello).run() == 'hello'

    @pytest.mark.asyncio
    async def test_from_future_returning_producer(self):
        """A producer may return any awaitable, such as a Future."""

        def producer():
            future = asyncio.get_running_loop().create_future()
            future.set_result('done')
            return future

        assert await Effect.from_async(producer).run() == 'done'

    @pytest.mark.asyncio
    async def test_unit(self):
        """unit is a shared Effect resolving to None."""
        assert await Effect.unit.run() is None
        assert Effect.unit is Effect.unit

    @pytest.mark.asyncio
    async def test_from_effect_is_not_double_wrapped(self):
        """from_ on an Effect copies it instead of nesting."""
        inner = Effect.from_(10)
        outer = Effect.from_(inner)
        assert outer is not inner
        assert await outer.run() == 10

    @pytest.mark.asyncio
    async def test_from_wraps_containers_as_values(self):
        """Containers are ordinary values to from_."""
        assert await Effect.from_(Ok(1)).run() == Ok(1)

    def test_producer_not_called_at_construction(self):
        """Building a pipeline runs nothing."""
        calls = []

        async def producer():
            calls.append('run')
            return 1

        Effect.from_async(producer).chain(lambda x: Effect.from_(x)).catch(lambda e: Effect.from_(0))
        assert calls == []


class TestEffectChain:
    """Tests for chain sequencing."""

    @pytest.mark.asyncio
    async def test_chain_sequence(self):
        """Chained stages run in order."""
        io = (
            Effect.from_(4)
            .chain(lambda value: Effect.from_(value + 2))
            .chain(lambda value: Effect.from_(value * 3))
            .chain(lambda value: Effect.from_(value / 2))
        )
        assert await io.run() == 9

    @pytest.mark.asyncio
    async def test_chain_from_unit(self):
        """unit is a neutral starting point."""
        io = Effect.unit.chain(lambda _: Effect.from_('start'))
        assert await io.run() == 'start'

    @pytest.mark.asyncio
    async def test_chain_double_wrapped(self):
        """A copied Effect chains like the original."""
        outer = Effect.from_(Effect.from_(5))
        io = Effect.from_(1).chain(lambda _: outer).chain(lambda v: Effect.from_(v * 2))
        assert await io.run() == 10

    @pytest.mark.asyncio
    async def test_chain_mapper_runs_after_first_stage(self):
        """The mapper waits for the first stage to finish."""
        events = []

        async def first():
            events.append('first:start')
            await asyncio.sleep(0)
            events.append('first:end')
            return 1

        def mapper(value):
            events.append(f'mapper:{value}')
            return Effect.from_(value + 1)

        assert await Effect.from_async(first).chain(mapper).run() == 2
        assert events == ['first:start', 'first:end', 'mapper:1']

    @pytest.mark.asyncio
    async def test_chain_propagates_second_stage_error(self):
        """A failing second stage fails the run."""

        async def boom():
            raise RuntimeError('Error in chain')

        io = Effect.from_(5).chain(lambda _: Effect.from_async(boom))
        with pytest.raises(RuntimeError, match='Error in chain'):
            await io.run()

    @pytest.mark.asyncio
    async def test_chain_skips_mapper_on_first_stage_error(self):
        """A failing first stage never calls the mapper."""
        calls = []

        async def boom():
            raise ValueError('first')

        io = Effect.from_async(boom).chain(lambda v: calls.append(v) or Effect.from_(v))
        with pytest.raises(ValueError, match='first'):
            await io.run()
        assert calls == []

    @pytest.mark.asyncio
    async def test_chain_mapper_exception_propagates(self):
        """An exception raised by the mapper fails the run."""
        io = Effect.from_({}).chain(lambda d: Effect.from_(d['missing']))
        with pytest.raises(KeyError):
            await io.run()

    @pytest.mark.asyncio
    async def test_chain_mapper_returning_non_effect_raises_type_error(self):
        """A mapper returning a plain value fails with a TypeError naming its type."""
        io = Effect.from_(1).chain(lambda x: x + 1)  # type: ignore[arg-type, return-value]
        with pytest.raises(TypeError, match='chain mapper must return an Effect, got int'):
            await io.run()

    @pytest.mark.asyncio
    async def test_chain_mapper_returning_container_raises_type_error(self):
        """Returning Ok instead of an Effect is reported, not an AttributeError."""
        io = Effect.from_(1).chain(lambda x: Ok(x))  # type: ignore[arg-type, return-value]
        with pytest.raises(TypeError, match='got Ok'):
            await io.run()


class TestEffectCatch:
    """Tests for catch recovery."""

    @pytest.mark.asyncio
    async def test_catch_recovers(self):
        """The recovery Effect replaces a failure."""

        async def oops():
            raise RuntimeError('Oops!')

        recovered = Effect.from_async(oops).catch(lambda _: Effect.from_(5))
        assert await recovered.run() == 5

    @pytest.mark.asyncio
    async def test_catch_receives_error(self):
        """The handler is given the raised exception."""

        async def oops():
            raise ValueError('bad input')

        recovered = Effect.from_async(oops).catch(lambda e: Effect.from_(str(e)))
        assert await recovered.run() == 'bad input'

    @pytest.mark.asyncio
    async def test_catch_not_called_on_success(self):
        """The handler is skipped on success."""
        calls = []
        io = Effect.from_(1).catch(lambda e: calls.append(e) or Effect.from_(0))
        assert await io.run() == 1
        assert calls == []

    @pytest.mark.asyncio
    async def test_catch_covers_earlier_chain_stages(self):
        """catch recovers failures from any earlier stage."""

        async def boom():
            raise RuntimeError('stage 2')

        io = Effect.from_(1).chain(lambda _: Effect.from_async(boom)).catch(lambda _: Effect.from_(-1))
        assert await io.run() == -1

    @pytest.mark.asyncio
    async def test_failing_recovery_propagates(self):
        """A failing recovery Effect is not handled again."""

        async def first():
            raise ValueError('first')

        async def second():
            raise RuntimeError('second')

        io = Effect.from_async(first).catch(lambda _: Effect.from_async(second))
        with pytest.raises(RuntimeError, match='second'):
            await io.run()

    @pytest.mark.asyncio
    async def test_nested_catch_recovers_failing_recovery(self):
        """An outer catch handles a failing recovery."""

        async def first():
            raise ValueError('first')

        async def second():
            raise RuntimeError('second')

        io = Effect.from_async(first).catch(lambda _: Effect.from_async(second)).catch(lambda _: Effect.from_('ok'))
        assert await io.run() == 'ok'

    @pytest.mark.asyncio
    async def test_catch_does_not_recover_panics(self):
        """Panics pass through catch."""

        async def contract_violation():
            panic('broken invariant')

        io = Effect.from_async(contract_violation).catch(lambda _: Effect.from_(0))
        with pytest.raises(Panic, match='broken invariant'):
            await io.run()

    @pytest.mark.asyncio
    async def test_catch_handler_returning_non_effect_raises_type_error(self):
        """A handler returning a plain value fails with a TypeError naming its type."""

        async def oops():
            raise RuntimeError('Oops!')

        io = Effect.from_async(oops).catch(lambda _: 'fallback')  # type: ignore[arg-type, return-value]
        with pytest.raises(TypeError, match='catch handler must return an Effect, got str'):
            await io.run()


class TestEffectRun:
    """Tests for re-execution, await support and run_sync."""

    @pytest.mark.asyncio
    async def test_run_twice_invokes_producer_twice(self):
        """Results are never cached between runs."""
        calls = 0

        async def producer():
            nonlocal calls
            calls += 1
            return calls

        io = Effect.from_async(producer)
        assert await io.run() == 1
        assert await io.run() == 2
        assert calls == 2

    @pytest.mark.asyncio
    async def test_chained_effect_reruns_every_stage(self):
        """Each run re-executes every stage."""
        calls = []

        async def producer():
            calls.append('producer')
            return 1

        def mapper(value):
            calls.append('mapper')
            return Effect.from_(value)

        io = Effect.from_async(producer).chain(mapper)
        await io.run()
        await io.run()
        assert calls == ['producer', 'mapper', 'producer', 'mapper']

    @pytest.mark.asyncio
    async def test_await_effect(self):
        """An Effect can be awaited directly."""
        assert await Effect.from_(3).chain(lambda x: Effect.from_(x + 1)) == 4

    def test_run_sync(self):
        """run_sync drives the Effect from synchronous code."""
        io = Effect.from_(4).chain(lambda x: Effect.from_(x * 2))
        assert io.run_sync() == 8
        assert io.run_sync() == 8

    def test_run_sync_raises(self):
        """run_sync re-raises the failure."""

        async def boom():
            raise LookupError('missing')

        with pytest.raises(LookupError, match='missing'):
            Effect.from_async(boom).run_sync()

    def test_repr(self):
        """repr names the producer."""

        async def fetch_user():
            return 1

        assert repr(Effect.from_async(fetch_user)) == f'Effect({fetch_user.__qualname__})'
