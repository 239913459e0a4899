#!/usr/bin/env python3
"""
Device Registry Monitor

This script shows the current state of all registered devices, including:
- Current status and urgency
- Owner identity
- Most recent history entry for each device

The registry is in-memory, so run it inside the process that owns the
service (or pass a registry to print_device_status).
"""

import sys
from datetime import datetime

from repair_registry.registry import DeviceRegistry


def get_device_status(registry: DeviceRegistry):
    """
    Collect status information for every registered device.

    Returns a list of dictionaries with device status information.
    """
    status_info = []
    for device in registry.list_devices():
        history = registry.get_device_history(device.id)
        latest = history[-1] if history else None

        history_info = {}
        if latest:
            history_info = {
                "timestamp": latest.timestamp,
                "status": latest.status,
                "notes": latest.notes,
                "updated_by": latest.updated_by,
            }

        status_info.append(
            {
                "id": device.id,
                "type": device.device_type,
                "owner": device.owner,
                "status": device.status,
                "urgency": device.urgency_level,
                "history_count": len(history),
                "latest_history": history_info,
            }
        )
    return status_info


def print_device_status(registry: DeviceRegistry):
    """
    Print a formatted display of all device statuses
    """
    status_info = get_device_status(registry)

    if not status_info:
        print("No devices registered.")
        return

    print("\n" + "=" * 100)
    print(
        f"{'ID':^5} | {'TYPE':^16} | {'STATUS':^12} | {'URGENCY':^8} | {'LAST EVENT':^48}"
    )
    print("-" * 100)

    for device in status_info:
        history_text = "No history"
        if device.get("latest_history"):
            history = device["latest_history"]
            history_text = f"block {history['timestamp']} - {history['notes']}"

        # Colorize urgency (ANSI colors)
        urgency_color = "\033[92m"  # Green for low
        if device["urgency"] == "high":
            urgency_color = "\033[91m"
        elif device["urgency"] == "medium":
            urgency_color = "\033[93m"
        reset_color = "\033[0m"

        print(
            f"{device['id']:^5} | {device['type'][:16]:^16} | {device['status'][:12]:^12} | "
            f"{urgency_color}{device['urgency'][:8]:^8}{reset_color} | {history_text[:48]:48}"
        )

    print("=" * 100)
    print(f"Total devices: {len(status_info)}")
    print(f"Last updated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print("=" * 100)


if __name__ == "__main__":
    from device_registry_service import get_device_registry_service, run_demo

    try:
        service = get_device_registry_service()
        run_demo(service)
        print_device_status(service.registry)
    except KeyboardInterrupt:
        print("\nMonitoring stopped.")
        sys.exit(0)
