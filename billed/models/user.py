from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class UserType(str, Enum):
    EMPLOYEE = "Employee"
    ADMIN = "Admin"


class UserSession(BaseModel):
    type: UserType
    email: str = ""

    @property
    def is_admin(self) -> bool:
        return self.type == UserType.ADMIN

    @property
    def list_scope(self) -> str | None:
        """Email to scope bill listings by; ``None`` lists every bill."""
        return None if self.is_admin else self.email
