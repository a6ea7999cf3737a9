"""Session DTOs shared across application layers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class User:
    id: int
    username: str
    email: str = ""
    first_name: str = ""
    last_name: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=int(data["id"]),
            username=data.get("username") or "",
            email=data.get("email") or "",
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
        )

    @property
    def full_name(self) -> str:
        name = f"{self.first_name} {self.last_name}".strip()
        return name or self.username


@dataclass(frozen=True)
class LoginCredentials:
    username: str
    password: str

    def to_payload(self) -> Dict[str, str]:
        return {"username": self.username, "password": self.password}


class SessionStatus(Enum):
    LOGGED_OUT = "logged_out"
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    ERROR = "error"


@dataclass(frozen=True)
class SessionState:
    is_authenticated: bool = False
    user: Optional[User] = None
    is_loading: bool = False
    error: Optional[str] = None

    @property
    def status(self) -> SessionStatus:
        if self.is_loading:
            return SessionStatus.LOADING
        if self.is_authenticated:
            return SessionStatus.AUTHENTICATED
        if self.error:
            return SessionStatus.ERROR
        return SessionStatus.LOGGED_OUT
