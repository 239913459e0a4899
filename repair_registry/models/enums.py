import enum


class DeviceStatus(str, enum.Enum):
    """
    Conventional repair lifecycle values.
    The registry stores any caller-supplied status; these are not enforced.
    """

    REGISTERED = "registered"
    MATCHED = "matched"
    IN_REPAIR = "in_repair"
    REPAIRED = "repaired"
    RETURNED = "returned"
    CANCELLED = "cancelled"


class UrgencyLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RegistryError(enum.IntEnum):
    """Error codes returned by the ledger entry points."""

    FORBIDDEN = 403
    NOT_FOUND = 404
