#!/usr/bin/env python3
"""
Redis subscriber for device status events.
Listens on the status channel and hands each change event to a callback.
"""

import json
import logging
import threading
from typing import Callable, Dict

from redis import Redis

from repair_registry.redis.client import STATUS_CHANNEL

logger = logging.getLogger(__name__)


class DeviceStatusSubscriber:
    """
    Subscriber for device status change events published by the registry.
    """

    def __init__(
        self,
        handler: Callable[[Dict], None],
        host="localhost",
        port=6379,
        db=0,
        password=None,
        channel=STATUS_CHANNEL,
        client=None,
    ):
        """Initialize Redis pubsub connection."""
        self.redis = client or Redis(
            host=host, port=port, db=db, password=password, decode_responses=True
        )
        self.pubsub = self.redis.pubsub()
        self.handler = handler
        self.channel = channel
        self.running = False
        self.thread = None
        logger.info(f"Device status subscriber initialized: {host}:{port}/db{db}")

    def start(self):
        """Start the subscriber in a separate thread."""
        self.pubsub.subscribe(self.channel)
        logger.info(f"Subscribed to {self.channel}")
        self.running = True
        self.thread = threading.Thread(target=self._listen_for_events)
        self.thread.daemon = True
        self.thread.start()
        logger.info("Device status subscriber started")

    def stop(self):
        """Stop the subscriber."""
        self.running = False
        if self.thread:
            self.thread.join(timeout=1.0)
        self.pubsub.unsubscribe()
        self.pubsub.close()
        logger.info("Device status subscriber stopped")

    def _listen_for_events(self):
        """Listen for published events and process them."""
        try:
            for message in self.pubsub.listen():
                if not self.running:
                    break
                if message["type"] == "message":
                    self.process_message(message["data"])
        except Exception as e:
            logger.error(f"Error in event listener: {e}")
            self.running = False

    def process_message(self, data) -> bool:
        """Decode one event payload and pass it to the handler."""
        try:
            event = json.loads(data)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed status event: {data!r}")
            return False
        if not isinstance(event, dict) or "device_id" not in event:
            logger.warning(f"Ignoring status event without device_id: {data!r}")
            return False

        logger.info(f"Device {event['device_id']} status event: {event.get('status')}")
        self.handler(event)
        return True
