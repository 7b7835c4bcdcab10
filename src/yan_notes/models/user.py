"""User models and the request bodies of the users endpoints."""

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class User:
    """Public profile of a user."""

    id: int
    username: str
    email: str
    status: int = 1
    is_admin: int = 0
    created_at: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == 1

    @property
    def is_administrator(self) -> bool:
        return self.is_admin == 1

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "User":
        return cls(
            id=int(data["id"]),
            username=data["username"],
            email=data.get("email", ""),
            status=int(data.get("status", 1)),
            is_admin=int(data.get("is_admin", 0)),
            created_at=data.get("created_at", ""),
        )

    def to_json(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class RegisterRequest:
    username: str
    password: str
    email: str

    def to_json(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    def to_json(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class UpdateProfileRequest:
    """Body of PUT /v1/users/:id. Fields left as None are not changed."""

    username: str | None = None
    email: str | None = None

    def to_json(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class ChangePasswordRequest:
    new_password: str

    def to_json(self) -> dict[str, Any]:
        return asdict(self)
