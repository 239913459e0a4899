"""
Technician authorization seam.

The registry asks an authorizer whether an identity is assigned as technician
to a device. Assignment itself is owned by another contract.
"""

from typing import Dict, Iterable, Mapping, Protocol, Set


class TechnicianAuthorizer(Protocol):
    def is_authorized(self, technician: str, device_id: int) -> bool: ...


class DenyAllTechnicians:
    """Authorizer used when no assignment source is wired in."""

    def is_authorized(self, technician: str, device_id: int) -> bool:
        return False


class StaticTechnicianAssignments:
    """Fixed device-to-technicians mapping, supplied at construction."""

    def __init__(self, assignments: Mapping[int, Iterable[str]]):
        self._assignments: Dict[int, Set[str]] = {
            int(device_id): set(technicians)
            for device_id, technicians in assignments.items()
        }

    def is_authorized(self, technician: str, device_id: int) -> bool:
        return technician in self._assignments.get(device_id, ())
