import threading

import pytest

from yaswf.adapters.app_message import LocalAppMessageChannel
from yaswf.async_bridge import AsyncBridge
from yaswf.core.handoff import send_with_callbacks
from yaswf.core.ports import MessageChannel
from yaswf.core.protocol import MessageSendError
from yaswf.core.watch_settings import WatchSettings


@pytest.fixture
def bridge():
    bridge = AsyncBridge()
    bridge.start()
    yield bridge
    bridge.stop()


def test_channel_is_a_message_channel(bridge):
    assert isinstance(LocalAppMessageChannel(WatchSettings(), bridge=bridge), MessageChannel)


def test_send_delivers_to_watch(bridge):
    settings = WatchSettings(vibrate_enabled=True)
    channel = LocalAppMessageChannel(settings, bridge=bridge, latency=0)

    ack = channel.send_app_message({"KEY_VIBRATE": False}).result(timeout=2)

    assert ack == {"transactionId": 1}
    assert settings.vibrate_enabled is False


def test_transaction_ids_increase(bridge):
    channel = LocalAppMessageChannel(WatchSettings(), bridge=bridge, latency=0)

    first = channel.send_app_message({"KEY_VIBRATE": True}).result(timeout=2)
    second = channel.send_app_message({"KEY_VIBRATE": True}).result(timeout=2)

    assert (first["transactionId"], second["transactionId"]) == (1, 2)


def test_unreadable_value_is_a_transmission_failure(bridge):
    settings = WatchSettings(vibrate_enabled=True)
    channel = LocalAppMessageChannel(settings, bridge=bridge, latency=0)

    future = channel.send_app_message({"KEY_VIBRATE": None})

    with pytest.raises(MessageSendError) as excinfo:
        future.result(timeout=2)
    assert excinfo.value.event["transactionId"] == 1
    assert settings.vibrate_enabled is True


def test_send_does_not_wait_for_delivery(bridge):
    channel = LocalAppMessageChannel(WatchSettings(), bridge=bridge, latency=0.2)

    future = channel.send_app_message({"KEY_VIBRATE": True})

    assert not future.done()
    future.result(timeout=2)


def test_continuations_through_local_channel(bridge):
    successes, failures = [], []
    succeeded, failed = threading.Event(), threading.Event()
    channel = LocalAppMessageChannel(WatchSettings(), bridge=bridge, latency=0)

    def on_success(ack):
        successes.append(ack)
        succeeded.set()

    def on_failure(event):
        failures.append(event)
        failed.set()

    send_with_callbacks(channel, {"KEY_VIBRATE": "off"}, on_success, on_failure)
    assert succeeded.wait(timeout=2)
    send_with_callbacks(channel, {"KEY_VIBRATE": 3}, on_success, on_failure)
    assert failed.wait(timeout=2)

    assert successes == [{"transactionId": 1}]
    assert len(failures) == 1
    assert failures[0]["transactionId"] == 2


def test_submit_requires_started_bridge():
    async def _noop():
        return None

    with pytest.raises(RuntimeError):
        AsyncBridge().submit(_noop())


def test_continuations_run_on_the_loop_thread(bridge):
    threads = []
    done = threading.Event()
    channel = LocalAppMessageChannel(WatchSettings(), bridge=bridge, latency=0.05)

    def on_success(ack):
        threads.append(threading.current_thread().name)
        done.set()

    send_with_callbacks(channel, {"KEY_VIBRATE": True}, on_success, lambda event: None)

    assert done.wait(timeout=2)
    assert threads == ["yaswf-AppMessage-loop"]


def test_stopped_bridge_rejects_submissions():
    async def _noop():
        return None

    bridge = AsyncBridge()
    bridge.start()
    bridge.stop()
    bridge.stop()

    with pytest.raises(RuntimeError):
        bridge.submit(_noop())
