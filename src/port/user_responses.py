"""Outbound response shapes. Every field is a pre-formatted string on the wire."""

from dataclasses import asdict, dataclass
from datetime import datetime

from domain.model.user import User


def format_timestamp(value: datetime) -> str:
    """RFC 3339 timestamp, e.g. 2026-01-23T12:00:00+00:00."""
    return value.isoformat()


@dataclass(frozen=True)
class GetUserResponse:
    id: str
    lastname: str
    firstname: str
    email: str
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, user: User) -> 'GetUserResponse':
        # Users are never updated, so updated_at mirrors created_at
        created_at = format_timestamp(user.created_at)
        return cls(
            id=str(user.id),
            lastname=user.lastname,
            firstname=user.firstname,
            email=user.email.value,
            created_at=created_at,
            updated_at=created_at,
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GetUsersResponse:
    users: list[GetUserResponse]

    @classmethod
    def from_entities(cls, users: list[User]) -> 'GetUsersResponse':
        return cls(users=[GetUserResponse.from_entity(u) for u in users])

    def to_dict(self) -> dict:
        return {"users": [u.to_dict() for u in self.users]}


@dataclass(frozen=True)
class LoginResponse:
    id: str
    lastname: str
    firstname: str
    email: str
    token: str
    expired_at: str

    @classmethod
    def from_entity(cls, user: User, token: str, expired_at: datetime) -> 'LoginResponse':
        """Shape issued credentials for a user. Issuing the token is the caller's job."""
        return cls(
            id=str(user.id),
            lastname=user.lastname,
            firstname=user.firstname,
            email=user.email.value,
            token=token,
            expired_at=format_timestamp(expired_at),
        )

    def to_dict(self) -> dict:
        return asdict(self)
