"""User and session schemas.

``User`` is the stored record (it carries the password credential);
``UserView`` is the public projection returned by every command.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from officine.models.enums import Role


class UserView(BaseModel):
    """Public user fields — never carries the password."""

    model_config = ConfigDict(use_enum_values=True)

    id: str
    username: str
    full_name: str
    role: Role
    active: bool = True
    created_at: str
    updated_at: str


class User(UserView):
    """Stored user record."""

    password: str = Field(repr=False)

    def view(self) -> UserView:
        return UserView.model_validate(self.model_dump(exclude={"password"}))


class SessionInfo(BaseModel):
    """Result of a successful login."""

    token: str
    user: UserView


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    username: str
    full_name: str
    role: Role
    password: str


class UpdateUserRequest(BaseModel):
    """Partial update — only provided fields are applied."""

    model_config = ConfigDict(use_enum_values=True)

    full_name: str | None = None
    role: Role | None = None
    active: bool | None = None
