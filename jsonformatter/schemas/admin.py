"""Request schema for the admin user-insert endpoint."""

from pydantic import BaseModel, ConfigDict, Field


class UserMasterInsert(BaseModel):
    """One directory account to create (or refresh display fields for)."""

    model_config = ConfigDict(populate_by_name=True)

    user_name: str = Field(..., min_length=1, max_length=255, alias="userName")
    full_name: str | None = Field(default=None, max_length=255, alias="fullname")
    email: str | None = Field(default=None, max_length=255)
