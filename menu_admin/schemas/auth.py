from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class UserRole(str, Enum):
    CUSTOMER = "customer"
    MANAGER = "manager"


class TokenPayload(BaseModel):
    sub: str  # subject issued by the auth service
    role: UserRole
    exp: datetime
