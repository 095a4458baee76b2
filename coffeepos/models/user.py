"""User and authentication models"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Role(str, Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    CASHIER = "cashier"


class User(BaseModel):
    """Authenticated staff member"""
    id: int
    name: str = ""
    username: str = ""
    role: Optional[str] = None

    class Config:
        extra = "allow"


class Credentials(BaseModel):
    username: str
    password: str


class UserInput(BaseModel):
    """Create/update payload for a staff account"""
    name: str
    username: str
    password: Optional[str] = None
    role: Role = Role.CASHIER


class LoginResponse(BaseModel):
    """Response from the login endpoint"""
    token: Optional[str] = None
    user: Optional[User] = None
    error: Optional[str] = None
    message: Optional[str] = None

    class Config:
        extra = "allow"
