"""
Test suite for fire-and-forget task tracking.

System role: Verification of background side effects
"""

import asyncio

import pytest

from lettercast.application.background import BackgroundTasks


class TestBackgroundTasks:
    """Test suite for BackgroundTasks."""

    @pytest.mark.asyncio
    async def test_drain_waits_for_spawned_work(self) -> None:
        # Arrange
        tasks = BackgroundTasks("test")
        done: list[int] = []

        async def work(n: int) -> None:
            await asyncio.sleep(0)
            done.append(n)

        # Act
        for n in range(3):
            tasks.spawn(work(n))
        await tasks.drain()

        # Assert
        assert sorted(done) == [0, 1, 2]
        assert tasks.pending == 0

    @pytest.mark.asyncio
    async def test_failures_are_contained(self) -> None:
        tasks = BackgroundTasks("test")

        async def boom() -> None:
            raise RuntimeError("nope")

        tasks.spawn(boom())
        await tasks.drain()
        assert tasks.pending == 0
