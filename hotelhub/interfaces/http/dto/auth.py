from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from hotelhub.domain.users.entities import Credentials, User


class RegisterRequestDTO(BaseModel):
    # Deliberately no format or strength rules on these fields.
    username: str
    email: str
    password: str

    def to_credentials(self) -> Credentials:
        return Credentials(email=self.email, password=self.password, username=self.username)


class LoginRequestDTO(BaseModel):
    email: str
    password: str

    def to_credentials(self) -> Credentials:
        return Credentials(email=self.email, password=self.password)


class UserResponseDTO(BaseModel):
    """Public shape of a user; the password hash is not a field here."""

    id: str
    username: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_entity(cls, user: User) -> UserResponseDTO:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )


class LoginResponseDTO(BaseModel):
    user_id: str = Field(serialization_alias="userId")
    token: str
