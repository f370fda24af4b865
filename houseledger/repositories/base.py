from typing import Optional

from bson import ObjectId


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a string id, None when it is not a valid ObjectId."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None
