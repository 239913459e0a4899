"""
Status notification tests. Redis is replaced with mocks.
"""

import json
import threading
from unittest.mock import MagicMock

import redis

from conftest import OWNER, WHEELCHAIR
from repair_registry.redis.client import RedisStatusNotifier
from repair_registry.redis.status_subscriber import DeviceStatusSubscriber
from repair_registry.registry import DeviceRegistry


class TestRedisStatusNotifier:
    """Tests for publishing status changes."""

    def test_notify_sets_key_and_publishes(self):
        client = MagicMock()
        notifier = RedisStatusNotifier(client=client)

        assert notifier.notify_status_change(1, "matched", "note", OWNER, 101)

        client.set.assert_called_once_with("device:status:1", "matched")
        channel, payload = client.publish.call_args.args
        assert channel == "device:status:events"
        assert json.loads(payload) == {
            "device_id": 1,
            "status": "matched",
            "notes": "note",
            "updated_by": OWNER,
            "timestamp": 101,
        }

    def test_notify_swallows_redis_errors(self):
        client = MagicMock()
        client.publish.side_effect = redis.exceptions.ConnectionError("down")
        notifier = RedisStatusNotifier(client=client)

        assert notifier.notify_status_change(1, "matched", "", OWNER, 101) is False

    def test_get_status(self):
        client = MagicMock()
        client.get.return_value = "in_repair"
        notifier = RedisStatusNotifier(client=client, key_prefix="repairs:")

        assert notifier.get_status(4) == "in_repair"
        client.get.assert_called_once_with("repairs:4")

    def test_device_id_from_key(self):
        notifier = RedisStatusNotifier(client=MagicMock())

        assert notifier.device_id_from_key("device:status:12") == 12
        assert notifier.device_id_from_key("device:status:abc") is None
        assert notifier.device_id_from_key("other:12") is None
        assert notifier.device_id_from_key("") is None


class TestRegistryNotifications:
    """Tests for the registry calling its notifier."""

    def test_status_update_notifies(self, clock):
        notifier = MagicMock()
        with DeviceRegistry(clock=clock, notifier=notifier) as registry:
            registry.register_device(**WHEELCHAIR, caller=OWNER)
            registry.update_device_status(1, "matched", "Matched", caller=OWNER)

        notifier.notify_status_change.assert_called_once_with(1, "matched", "Matched", OWNER, 100)

    def test_notifier_runs_without_registry_lock(self, clock):
        """Test other threads can use the registry while a notification is in flight."""
        reads = []

        def notify(device_id, *args):
            reader = threading.Thread(target=lambda: reads.append(registry.get_device(device_id)))
            reader.start()
            reader.join(timeout=1.0)
            assert not reader.is_alive()

        notifier = MagicMock()
        notifier.notify_status_change.side_effect = notify
        with DeviceRegistry(clock=clock, notifier=notifier) as registry:
            registry.register_device(**WHEELCHAIR, caller=OWNER)
            result = registry.update_device_status(1, "matched", "", caller=OWNER)

        assert result.is_ok
        assert [device.status for device in reads] == ["matched"]

    def test_failed_update_does_not_notify(self, clock):
        notifier = MagicMock()
        with DeviceRegistry(clock=clock, notifier=notifier) as registry:
            registry.update_device_status(1, "matched", "", caller=OWNER)

        notifier.notify_status_change.assert_not_called()

    def test_redis_outage_keeps_update(self, clock):
        client = MagicMock()
        client.set.side_effect = redis.exceptions.ConnectionError("down")
        notifier = RedisStatusNotifier(client=client)
        with DeviceRegistry(clock=clock, notifier=notifier) as registry:
            registry.register_device(**WHEELCHAIR, caller=OWNER)

            result = registry.update_device_status(1, "matched", "", caller=OWNER)

            assert result.is_ok
            assert registry.get_device(1).status == "matched"


class TestDeviceStatusSubscriber:
    """Tests for decoding published events."""

    def test_process_message_calls_handler(self):
        handler = MagicMock()
        subscriber = DeviceStatusSubscriber(handler, client=MagicMock())

        event = {"device_id": 1, "status": "matched"}
        assert subscriber.process_message(json.dumps(event))

        handler.assert_called_once_with(event)

    def test_malformed_payloads_are_skipped(self):
        handler = MagicMock()
        subscriber = DeviceStatusSubscriber(handler, client=MagicMock())

        assert not subscriber.process_message("not json")
        assert not subscriber.process_message(json.dumps({"status": "matched"}))
        assert not subscriber.process_message(json.dumps([1, 2]))
        handler.assert_not_called()

    def test_start_and_stop(self):
        client = MagicMock()
        client.pubsub.return_value.listen.return_value = iter(
            [
                {"type": "subscribe", "data": 1},
                {"type": "message", "data": json.dumps({"device_id": 2, "status": "repaired"})},
            ]
        )
        received = []
        subscriber = DeviceStatusSubscriber(received.append, client=client)

        subscriber.start()
        subscriber.thread.join(timeout=1.0)
        subscriber.stop()

        pubsub = client.pubsub.return_value
        pubsub.subscribe.assert_called_once_with("device:status:events")
        pubsub.unsubscribe.assert_called_once()
        assert received == [{"device_id": 2, "status": "repaired"}]
