from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, ConfigDict, field_validator


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MongoModel(BaseModel):
    """
    Base for persisted documents.

    Ids are kept as strings on the Python side; `_id` ObjectIds coming back
    from the driver are converted on validation.
    """
    id: Optional[str] = Field(default=None, validation_alias="_id", serialization_alias="_id")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Any:
        if isinstance(value, ObjectId):
            return str(value)
        return value

    def to_document(self) -> dict:
        """Dump for insertion, leaving `_id` to the driver when unset."""
        return self.model_dump(by_alias=True, exclude={"id"} if self.id is None else None)
