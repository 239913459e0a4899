from typing import Iterable, List, Union

from sqlalchemy import Column, Integer, String, Text

from repair_registry.db.database import Base
from repair_registry.models.enums import DeviceStatus

IMAGE_SEPARATOR = ","
ESCAPED_SEPARATOR = "%2C"


def join_images(images: Union[str, Iterable[str], None]) -> str:
    """
    Collapse an image URL sequence into the stored comma-joined form.

    Commas inside a URL are percent-encoded so the list splits back to the
    same URLs. A string is taken as already joined and stored unchanged.
    """
    if images is None:
        return ""
    if isinstance(images, str):
        return images
    return IMAGE_SEPARATOR.join(url.replace(IMAGE_SEPARATOR, ESCAPED_SEPARATOR) for url in images)


def split_images(images: str) -> List[str]:
    """Inverse of join_images. A literal ``%2C`` in a URL comes back as a comma."""
    if not images:
        return []
    return [url.replace(ESCAPED_SEPARATOR, IMAGE_SEPARATOR) for url in images.split(IMAGE_SEPARATOR)]


class Device(Base):
    __tablename__ = "devices"
    # ids are never reused, even after the highest row changes
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    owner = Column(String, nullable=False, index=True)
    device_type = Column(String, nullable=False)
    manufacturer = Column(String, nullable=False)
    model = Column(String, nullable=False)
    serial_number = Column(String, nullable=False)
    year = Column(Integer, nullable=False)
    issue_description = Column(Text, nullable=False)
    urgency_level = Column(String, nullable=False)
    location = Column(String, nullable=False)
    images = Column(Text, nullable=False, default="")
    status = Column(String, nullable=False, default=DeviceStatus.REGISTERED.value)
    # Block height at registration
    registration_date = Column(Integer, nullable=False)

    @property
    def image_urls(self) -> List[str]:
        return split_images(self.images)

    @image_urls.setter
    def image_urls(self, urls: Iterable[str]) -> None:
        self.images = join_images(urls)

    def __repr__(self) -> str:
        return f"<Device(id={self.id}, type={self.device_type!r}, status={self.status!r})>"
