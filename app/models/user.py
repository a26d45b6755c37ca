"""School staff accounts: admins, counselors, teachers."""
from datetime import datetime
from enum import Enum
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, EmailStr, Field


class UserRole(str, Enum):
    ADMIN = "admin"
    COUNSELOR = "counselor"
    TEACHER = "teacher"


class User(Document):
    """Staff user. Every attendance record, setting and alert is scoped to one."""

    email: Indexed(EmailStr, unique=True)
    hashed_password: str
    role: UserRole
    full_name: str
    school_name: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)

    class Settings:
        name = "users"
        use_state_management = True


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    role: UserRole = UserRole.TEACHER
    full_name: str
    school_name: Optional[str] = None


class UserOut(BaseModel):
    id: str
    email: str
    role: UserRole
    full_name: str
    school_name: Optional[str] = None
    is_active: bool
