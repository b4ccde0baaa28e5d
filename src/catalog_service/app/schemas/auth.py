from datetime import datetime

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    email: str = Field(..., min_length=1, description="Admin email address")
    password: str = Field(..., min_length=1, description="Admin password")


class AdminUserOut(BaseModel):
    id: int
    email: str
    name: str | None = None
    role: str
    last_login: datetime | None = None


class LoginResponse(BaseModel):
    message: str = Field(..., description="Result message")
    token: str = Field(..., description="Bearer token for authenticated routes")
    user: AdminUserOut
