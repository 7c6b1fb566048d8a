from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class UserRecord(BaseModel):
    """One row of the provisioning CSV."""

    username: str = Field(alias="UserName")
    first_name: str = Field(default="", alias="FirstName")
    last_name: str = Field(default="", alias="LastName")
    department: str = Field(default="", alias="Department")

    model_config = {"populate_by_name": True}

    @field_validator("username", "first_name", "last_name", "department", mode="before")
    @classmethod
    def _blank_to_str(cls, value: object) -> str:
        # csv.DictReader yields None for cells missing from short rows
        return "" if value is None else str(value).strip()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class CleanupEntry(BaseModel):
    """One row of the cleanup CSV, reduced to the account name."""

    username: str = Field(alias="UserName")

    model_config = {"populate_by_name": True}

    @field_validator("username", mode="before")
    @classmethod
    def _strip(cls, value: object) -> str:
        return "" if value is None else str(value).strip()


class ProfileInfo(BaseModel):
    """A user profile registered on the host."""

    sid: str
    path: str = ""
    loaded: bool = False
