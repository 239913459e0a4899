#!/usr/bin/env python3
"""
Redis notifier for device status changes.
Caches the latest status per device and publishes change events so
technicians and dashboards can follow a repair without polling the registry.
"""

import json
import logging
from typing import Optional

import redis

logger = logging.getLogger(__name__)

# Key prefix and channel (must match the ones used by the status subscriber)
DEVICE_STATUS_KEY_PREFIX = "device:status:"
STATUS_CHANNEL = "device:status:events"


class RedisStatusNotifier:
    """Publishes committed device status changes to Redis."""

    def __init__(
        self,
        host="localhost",
        port=6379,
        db=0,
        password=None,
        channel=STATUS_CHANNEL,
        key_prefix=DEVICE_STATUS_KEY_PREFIX,
        client=None,
    ):
        """Initialize Redis connection."""
        self.redis = client or redis.Redis(
            host=host, port=port, db=db, password=password, decode_responses=True
        )
        self.channel = channel
        self.key_prefix = key_prefix
        logger.info(f"Redis status notifier initialized: {host}:{port}/db{db}")

    def status_key(self, device_id: int) -> str:
        return f"{self.key_prefix}{device_id}"

    def notify_status_change(
        self, device_id: int, status: str, notes: str, updated_by: str, timestamp: int
    ) -> bool:
        """
        Cache the new status and publish a change event.

        Args:
            device_id: Device whose status changed
            status: The new status value
            notes: Notes recorded with the change
            updated_by: Identity that made the change
            timestamp: Block height of the change

        Returns:
            bool: Success status
        """
        event = {
            "device_id": device_id,
            "status": status,
            "notes": notes,
            "updated_by": updated_by,
            "timestamp": timestamp,
        }
        try:
            self.redis.set(self.status_key(device_id), status)
            self.redis.publish(self.channel, json.dumps(event))
            logger.debug(f"Published status {status!r} for device {device_id}")
            return True
        except redis.exceptions.RedisError as e:
            logger.error(f"Error publishing status for device {device_id}: {e}")
            return False

    def get_status(self, device_id: int) -> Optional[str]:
        """
        Get the last published status of a device.

        Returns:
            str: cached status, or None if never published or Redis is unavailable
        """
        try:
            return self.redis.get(self.status_key(device_id))
        except redis.exceptions.RedisError as e:
            logger.error(f"Error getting status for device {device_id}: {e}")
            return None

    def device_id_from_key(self, key: str) -> Optional[int]:
        """
        Extract device ID from Redis key.

        Returns:
            int: Device ID or None if key format is invalid
        """
        if key and key.startswith(self.key_prefix):
            try:
                return int(key[len(self.key_prefix) :])
            except ValueError:
                return None
        return None
