"""Contract-shaped views of registry rows."""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from repair_registry.models.device import join_images, split_images


class DeviceRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    owner: str
    device_type: str = Field(alias="device-type")
    manufacturer: str
    model: str
    serial_number: str = Field(alias="serial-number")
    year: int
    issue_description: str = Field(alias="issue-description")
    urgency_level: str = Field(alias="urgency-level")
    location: str
    images: List[str] = Field(default_factory=list)
    status: str
    registration_date: int = Field(alias="registration-date")

    @field_validator("images", mode="before")
    @classmethod
    def _split_images(cls, value: Any) -> Any:
        if isinstance(value, str):
            return split_images(value)
        return value

    @field_serializer("images")
    def _join_images(self, images: List[str]) -> str:
        return join_images(images)

    def to_contract(self) -> Dict[str, Any]:
        """Tuple as the ledger returns it: hyphenated keys, comma-joined images."""
        return self.model_dump(by_alias=True, exclude={"id"})


class HistoryRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    device_id: int = Field(alias="device-id")
    status: str
    notes: str
    updated_by: str = Field(alias="updated-by")
    timestamp: int

    def to_contract(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude={"id"})
