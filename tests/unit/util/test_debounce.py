"""Unit tests for Debouncer."""

import asyncio

import pytest

from threadlens.util.debounce import Debouncer


class TestDebouncer:
    @pytest.mark.asyncio
    async def test_only_last_call_fires(self):
        # Arrange
        fired = []
        debouncer = Debouncer(0.01)

        # Act
        debouncer.call(fired.append, 1)
        debouncer.call(fired.append, 2)
        assert debouncer.pending
        await asyncio.sleep(0.05)

        # Assert
        assert fired == [2]
        assert not debouncer.pending

    @pytest.mark.asyncio
    async def test_cancel(self):
        fired = []
        debouncer = Debouncer(0.01)
        debouncer.call(fired.append, 1)

        assert debouncer.cancel() is True
        await asyncio.sleep(0.03)

        assert fired == []
        assert debouncer.cancel() is False
