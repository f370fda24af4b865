from pydantic import BaseModel


class CurrentUser(BaseModel):
    """The authenticated caller, as read from the bearer token."""
    id: str
    name: str = ""
