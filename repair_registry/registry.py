"""
In-memory device registry standing in for the repair-registration contract.

The registry owns one engine and session, both id sequences (table
autoincrement) and a lock that makes each entry point atomic. Collaborators
supplying time, technician authorization and status notifications are
injected.
"""

import logging
import threading
from typing import Callable, List, Optional

from repair_registry.core.clock import BlockHeightClock
from repair_registry.core.technicians import DenyAllTechnicians, TechnicianAuthorizer
from repair_registry.crud import device as crud
from repair_registry.crud.device import Images
from repair_registry.crud.result import Result
from repair_registry.db.database import Base, make_engine, make_session_factory
from repair_registry.models.device import Device
from repair_registry.models.device_history import DeviceHistory

logger = logging.getLogger(__name__)


class DeviceRegistry:
    """Explicit store object for device records and their history log."""

    def __init__(
        self,
        database_url: str = "sqlite://",
        clock: Optional[Callable[[], int]] = None,
        technicians: Optional[TechnicianAuthorizer] = None,
        notifier=None,
        echo: bool = False,
    ):
        self.engine = make_engine(database_url, echo=echo)
        self._session_factory = make_session_factory(self.engine)
        self.clock = clock or BlockHeightClock()
        self.technicians = technicians or DenyAllTechnicians()
        self.notifier = notifier
        self._lock = threading.RLock()

        Base.metadata.create_all(bind=self.engine)
        self.session = self._session_factory()
        logger.info(f"Device registry initialized on {database_url}")

    def _now(self, current_time: Optional[int]) -> int:
        return self.clock() if current_time is None else current_time

    def reset(self):
        """Drop all devices and history, restarting both id sequences at 1."""
        with self._lock:
            self.session.close()
            Base.metadata.drop_all(bind=self.engine)
            Base.metadata.create_all(bind=self.engine)
            self.session = self._session_factory()
            logger.info("Device registry reset")

    def close(self):
        with self._lock:
            self.session.close()
            self.engine.dispose()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def is_authorized_technician(self, caller: str, device_id: int) -> bool:
        return self.technicians.is_authorized(caller, device_id)

    def register_device(
        self,
        device_type: str,
        manufacturer: str,
        model: str,
        serial_number: str,
        year: int,
        issue_description: str,
        urgency_level: str,
        location: str,
        images: Images,
        caller: str,
        current_time: Optional[int] = None,
    ) -> Result[int]:
        with self._lock:
            return crud.register_device(
                self.session,
                device_type=device_type,
                manufacturer=manufacturer,
                model=model,
                serial_number=serial_number,
                year=year,
                issue_description=issue_description,
                urgency_level=urgency_level,
                location=location,
                images=images,
                caller=caller,
                current_time=self._now(current_time),
            )

    def update_device_info(
        self,
        device_id: int,
        issue_description: str,
        urgency_level: str,
        location: str,
        images: Images,
        caller: str,
        current_time: Optional[int] = None,
    ) -> Result[int]:
        with self._lock:
            return crud.update_device_info(
                self.session,
                device_id,
                issue_description=issue_description,
                urgency_level=urgency_level,
                location=location,
                images=images,
                caller=caller,
                current_time=self._now(current_time),
            )

    def update_device_status(
        self,
        device_id: int,
        status: str,
        notes: str,
        caller: str,
        current_time: Optional[int] = None,
    ) -> Result[int]:
        with self._lock:
            timestamp = self._now(current_time)
            result = crud.update_device_status(
                self.session,
                device_id,
                status=status,
                notes=notes,
                caller=caller,
                current_time=timestamp,
                is_technician=self.is_authorized_technician,
            )
        # outside the lock; the write is already committed
        if result.is_ok and self.notifier is not None:
            self.notifier.notify_status_change(device_id, status, notes, caller, timestamp)
        return result

    def _detach(self, rows):
        """Expunge rows so callers hold snapshots that never touch the session."""
        for row in rows:
            self.session.expunge(row)
        return rows

    def get_device(self, device_id: int) -> Optional[Device]:
        with self._lock:
            device = crud.get_device(self.session, device_id)
            if device is not None:
                self.session.expunge(device)
            return device

    def get_device_history(self, device_id: int) -> List[DeviceHistory]:
        with self._lock:
            return self._detach(crud.get_device_history(self.session, device_id))

    def list_devices(self) -> List[Device]:
        with self._lock:
            return self._detach(crud.list_devices(self.session))
