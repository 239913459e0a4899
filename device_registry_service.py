#!/usr/bin/env python3
"""
Device registry service.
This service will:
1. Build the in-memory registry from settings
2. Wire the Redis status notifier when enabled
3. Expose the registry's entry points to the rest of the application
"""

import logging

from repair_registry.core.clock import BlockHeightClock
from repair_registry.core.config import settings
from repair_registry.models.enums import DeviceStatus, UrgencyLevel
from repair_registry.redis.client import RedisStatusNotifier
from repair_registry.registry import DeviceRegistry
from repair_registry.schemas.device import DeviceRecord, HistoryRecord

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger("device_registry_service")


class DeviceRegistryService:
    """
    Owns the registry, its clock and the optional status notifier.
    """

    def __init__(self, config=None, technicians=None, redis_client=None):
        """Initialize the service from settings."""
        self.settings = config or settings
        self.clock = BlockHeightClock(start=self.settings.GENESIS_BLOCK_HEIGHT)

        self.notifier = None
        if self.settings.REDIS_ENABLED or redis_client is not None:
            self.notifier = RedisStatusNotifier(
                host=self.settings.REDIS_HOST,
                port=self.settings.REDIS_PORT,
                db=self.settings.REDIS_DB,
                password=self.settings.REDIS_PASSWORD,
                channel=self.settings.STATUS_CHANNEL,
                key_prefix=self.settings.STATUS_KEY_PREFIX,
                client=redis_client,
            )

        self.registry = DeviceRegistry(
            database_url=self.settings.DATABASE_URL,
            clock=self.clock,
            technicians=technicians,
            notifier=self.notifier,
            echo=self.settings.DATABASE_ECHO,
        )
        logger.info("Device Registry Service initialized")

    def device_snapshot(self, device_id):
        """Contract view of a device and its history, or None if unknown."""
        device = self.registry.get_device(device_id)
        if device is None:
            return None
        return {
            "device": DeviceRecord.model_validate(device).to_contract(),
            "history": [
                HistoryRecord.model_validate(entry).to_contract()
                for entry in self.registry.get_device_history(device_id)
            ],
        }

    def shutdown(self):
        self.registry.close()
        logger.info("Device Registry Service stopped")


# Singleton instance for use across the application
device_registry_service = None


def get_device_registry_service():
    """Get or create a singleton instance of the DeviceRegistryService."""
    global device_registry_service
    if device_registry_service is None:
        device_registry_service = DeviceRegistryService()
    return device_registry_service


def run_demo(service):
    """Walk one wheelchair through registration, an info update and matching."""
    owner = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
    registry = service.registry

    result = registry.register_device(
        "Wheelchair",
        "Sunrise Medical",
        "Quickie 2",
        "QK2-12345",
        2018,
        "Right wheel bearing is making noise and wheel wobbles",
        UrgencyLevel.MEDIUM.value,
        "123 Main St, Anytown, USA",
        [
            "https://example.com/wheelchair-image1.jpg",
            "https://example.com/wheelchair-image2.jpg",
        ],
        caller=owner,
    )
    device_id = result.value

    service.clock.advance()
    registry.update_device_info(
        device_id,
        "Right wheel bearing is making noise, wheel wobbles, and now brake is also not engaging properly",
        UrgencyLevel.HIGH.value,
        "123 Main St, Anytown, USA",
        "https://example.com/wheelchair-image1.jpg,https://example.com/wheelchair-image2.jpg",
        caller=owner,
    )

    service.clock.advance()
    registry.update_device_status(
        device_id,
        DeviceStatus.MATCHED.value,
        "Device matched with technician John Smith",
        caller=owner,
    )
    return service.device_snapshot(device_id)


if __name__ == "__main__":
    service = get_device_registry_service()
    try:
        snapshot = run_demo(service)
        logger.info(f"Device: {snapshot['device']}")
        for entry in snapshot["history"]:
            logger.info(f"History: {entry}")
    finally:
        service.shutdown()
