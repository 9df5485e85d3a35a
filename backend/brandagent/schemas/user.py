"""User listing schema. Deliberately has no password field."""

from pydantic import BaseModel, ConfigDict


class UserItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    role: str
