import logging
from typing import Callable, Iterable, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from repair_registry.crud.result import Result
from repair_registry.models.device import Device, join_images
from repair_registry.models.device_history import DeviceHistory
from repair_registry.models.enums import DeviceStatus, RegistryError

logger = logging.getLogger(__name__)

REGISTERED_NOTES = "Device registered for repair"
INFO_UPDATED_NOTES = "Device information updated"

Images = Union[str, Iterable[str]]


def get_device(db: Session, device_id: int) -> Optional[Device]:
    """Get a device by ID"""
    return db.query(Device).filter(Device.id == device_id).first()


def list_devices(db: Session) -> List[Device]:
    return db.query(Device).order_by(Device.id).all()


def get_device_history(db: Session, device_id: int) -> List[DeviceHistory]:
    """All history entries for a device, oldest first."""
    return (
        db.query(DeviceHistory)
        .filter(DeviceHistory.device_id == device_id)
        .order_by(DeviceHistory.id)
        .all()
    )


def add_history_entry(
    db: Session, device_id: int, status: str, notes: str, updated_by: str, timestamp: int
) -> DeviceHistory:
    """Stage a history entry in the current transaction. The caller commits."""
    entry = DeviceHistory(
        device_id=device_id,
        status=status,
        notes=notes,
        updated_by=updated_by,
        timestamp=timestamp,
    )
    db.add(entry)
    return entry


def register_device(
    db: Session,
    *,
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
    current_time: int,
) -> Result[int]:
    """
    Register a device for repair and record its first history entry.

    No field is validated; whatever the caller submits is stored.

    Returns:
        Result: the new device id
    """
    try:
        db_device = Device(
            owner=caller,
            device_type=device_type,
            manufacturer=manufacturer,
            model=model,
            serial_number=serial_number,
            year=year,
            issue_description=issue_description,
            urgency_level=urgency_level,
            location=location,
            images=join_images(images),
            status=DeviceStatus.REGISTERED.value,
            registration_date=current_time,
        )
        db.add(db_device)
        # flush to get the id for the history row, both land in one commit
        db.flush()
        add_history_entry(
            db,
            db_device.id,
            DeviceStatus.REGISTERED.value,
            REGISTERED_NOTES,
            caller,
            current_time,
        )
        db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error registering device for {caller}: {e}")
        db.rollback()
        raise

    logger.info(f"Device {db_device.id} ({device_type}) registered by {caller}")
    return Result.ok(db_device.id)


def update_device_info(
    db: Session,
    device_id: int,
    *,
    issue_description: str,
    urgency_level: str,
    location: str,
    images: Images,
    caller: str,
    current_time: int,
) -> Result[int]:
    """
    Replace the owner-editable fields of a device.

    Status, owner and registration date are left untouched; the history entry
    carries the device's current status.

    Returns:
        Result: the device id, or NOT_FOUND / FORBIDDEN
    """
    db_device = get_device(db, device_id)
    if not db_device:
        logger.info(f"Info update for unknown device {device_id} by {caller}")
        return Result.fail(RegistryError.NOT_FOUND)
    if db_device.owner != caller:
        logger.warning(f"{caller} is not the owner of device {device_id}")
        return Result.fail(RegistryError.FORBIDDEN)

    try:
        db_device.issue_description = issue_description
        db_device.urgency_level = urgency_level
        db_device.location = location
        db_device.images = join_images(images)
        add_history_entry(
            db, device_id, db_device.status, INFO_UPDATED_NOTES, caller, current_time
        )
        db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error updating device {device_id} info: {e}")
        db.rollback()
        raise

    logger.info(f"Device {device_id} information updated by {caller}")
    return Result.ok(device_id)


def update_device_status(
    db: Session,
    device_id: int,
    *,
    status: str,
    notes: str,
    caller: str,
    current_time: int,
    is_technician: Callable[[str, int], bool],
) -> Result[int]:
    """
    Set a device's status and record the change.

    Args:
        db: The database session
        device_id: The ID of the device to update
        status: The new status value, stored exactly as given
        notes: Free-text notes for the history entry
        caller: Identity performing the update
        current_time: Block height for the history entry
        is_technician: Answers whether ``caller`` is assigned to the device

    Returns:
        Result: the device id, or NOT_FOUND / FORBIDDEN
    """
    db_device = get_device(db, device_id)
    if not db_device:
        logger.info(f"Status update for unknown device {device_id} by {caller}")
        return Result.fail(RegistryError.NOT_FOUND)
    if db_device.owner != caller and not is_technician(caller, device_id):
        logger.warning(
            f"{caller} is neither owner nor assigned technician of device {device_id}"
        )
        return Result.fail(RegistryError.FORBIDDEN)

    previous_status = db_device.status
    try:
        db_device.status = status
        add_history_entry(db, device_id, status, notes, caller, current_time)
        db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error updating device {device_id} status: {e}")
        db.rollback()
        raise

    logger.info(
        f"Device {device_id} status changed {previous_status!r} -> {status!r} by {caller}"
    )
    return Result.ok(device_id)
