from sqlalchemy import Column, Integer, String, Text, ForeignKey

from repair_registry.db.database import Base


class DeviceHistory(Base):
    __tablename__ = "device_history"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(Integer, ForeignKey("devices.id"), nullable=False, index=True)
    status = Column(String, nullable=False)
    notes = Column(Text, nullable=False, default="")
    updated_by = Column(String, nullable=False)
    timestamp = Column(Integer, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<DeviceHistory(id={self.id}, device_id={self.device_id}, "
            f"status={self.status!r})>"
        )
