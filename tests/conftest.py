import pytest

from repair_registry.core.clock import BlockHeightClock
from repair_registry.registry import DeviceRegistry

OWNER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
TECHNICIAN = "ST2PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
BLOCK_HEIGHT = 100

WHEELCHAIR = dict(
    device_type="Wheelchair",
    manufacturer="Sunrise Medical",
    model="Quickie 2",
    serial_number="QK2-12345",
    year=2018,
    issue_description="Right wheel bearing is making noise and wheel wobbles",
    urgency_level="medium",
    location="123 Main St, Anytown, USA",
    images="https://example.com/wheelchair-image1.jpg,https://example.com/wheelchair-image2.jpg",
)

UPDATED_INFO = dict(
    issue_description="Right wheel bearing is making noise, wheel wobbles, and now brake is also not engaging properly",
    urgency_level="high",
    location="123 Main St, Anytown, USA",
    images="https://example.com/wheelchair-image1.jpg,https://example.com/wheelchair-image2.jpg,https://example.com/wheelchair-image3.jpg",
)


@pytest.fixture
def clock():
    return BlockHeightClock(start=BLOCK_HEIGHT)


@pytest.fixture
def registry(clock):
    reg = DeviceRegistry(clock=clock)
    yield reg
    reg.close()


@pytest.fixture
def wheelchair(registry):
    """Register the wheelchair as OWNER and return its id."""
    return registry.register_device(**WHEELCHAIR, caller=OWNER).value
