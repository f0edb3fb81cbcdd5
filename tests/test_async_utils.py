"""
Tests for async helpers.
"""

import asyncio

import pytest

from modcompile.utils.async_utils import dual, sequence


class TestSequence:
    @pytest.mark.asyncio
    async def test_runs_one_at_a_time_in_order(self):
        events = []

        async def work(item):
            events.append(("start", item))
            await asyncio.sleep(0.001 * (3 - item))
            events.append(("end", item))

        await sequence([0, 1, 2], work)

        assert events == [("start", 0), ("end", 0), ("start", 1), ("end", 1), ("start", 2), ("end", 2)]

    @pytest.mark.asyncio
    async def test_stops_at_first_failure(self):
        started = []

        async def work(item):
            started.append(item)
            if item == "b":
                raise ValueError(item)

        with pytest.raises(ValueError, match="b"):
            await sequence(["a", "b", "c"], work)

        assert started == ["a", "b"]

    @pytest.mark.asyncio
    async def test_accepts_generators(self):
        seen = []

        async def work(item):
            seen.append(item)

        await sequence((i * 2 for i in range(3)), work)
        assert seen == [0, 2, 4]


class TestDual:
    def test_rejects_sync_functions(self):
        with pytest.raises(TypeError):
            dual(lambda: None)

    def test_sync_call_blocks(self):
        @dual
        async def answer():
            await asyncio.sleep(0)
            return 42

        assert answer() == 42

    @pytest.mark.asyncio
    async def test_async_call_returns_awaitable(self):
        @dual
        async def answer():
            return 7

        assert await answer() == 7
