from repair_registry.models.device import Device
from repair_registry.models.device_history import DeviceHistory
from repair_registry.models.enums import DeviceStatus, RegistryError, UrgencyLevel

__all__ = ["Device", "DeviceHistory", "DeviceStatus", "RegistryError", "UrgencyLevel"]
