# tests/test_observable.py
"""
Observable Tests - Hot Latest-Value Stream Semantics
"""
import asyncio
import threading

import pytest

from fxsync.shared.observable import Observable


class TestObservable:
    def test_new_subscriber_gets_latest_value(self):
        obs = Observable(1)
        obs.set_value(2)
        received = []
        obs.subscribe(received.append)
        assert received == [2]

    def test_updates_reach_all_subscribers(self):
        obs = Observable()
        first, second = [], []
        obs.subscribe(first.append)
        obs.subscribe(second.append)
        obs.set_value("a")
        obs.set_value("b")
        assert first == [None, "a", "b"]
        assert second == [None, "a", "b"]

    def test_dispose_stops_delivery(self):
        obs = Observable(0)
        received = []
        subscription = obs.subscribe(received.append)
        subscription.dispose()
        subscription.dispose()
        obs.set_value(1)
        assert received == [0]
        assert obs.subscriber_count == 0
        assert not subscription.active

    def test_failing_subscriber_does_not_block_others(self):
        obs = Observable(0)

        def broken(value):
            if value:
                raise RuntimeError("boom")

        received = []
        obs.subscribe(broken)
        obs.subscribe(received.append)
        obs.set_value(1)
        assert received == [0, 1]
        assert obs.value == 1

    def test_post_value_without_loop_is_immediate(self):
        obs = Observable(0)
        obs.post_value(5)
        assert obs.value == 5


@pytest.mark.asyncio
async def test_post_value_from_worker_thread_is_marshaled_to_loop():
    loop = asyncio.get_running_loop()
    loop_thread = threading.get_ident()
    obs = Observable(0, loop=loop)
    delivered = asyncio.Event()
    threads = []

    def on_value(value):
        if value == 1:
            threads.append(threading.get_ident())
            delivered.set()

    obs.subscribe(on_value)
    worker = threading.Thread(target=obs.post_value, args=(1,))
    worker.start()
    worker.join()
    await asyncio.wait_for(delivered.wait(), timeout=2)

    assert threads == [loop_thread]
