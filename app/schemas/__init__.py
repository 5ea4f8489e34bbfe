"""Pydantic schemas used across the project."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=1, max_length=72)


class AccountCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    password: str = Field(..., min_length=6, max_length=72)
    email: Optional[EmailStr] = None


class AccountUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=72)


class AccountSummary(BaseModel):
    id: str
    username: str
    email: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    token: str
    token_type: str = "bearer"
    user: AccountSummary


class AccountResponse(AccountSummary):
    created_at: datetime
    updated_at: datetime


class AccountUpdateResponse(AccountSummary):
    updated_at: datetime


class AudioFileResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    category: str
    s3_key: str
    s3_url: Optional[str] = None
    file_name: str
    file_size: int
    mime_type: str
    user_id: str
    created_at: datetime
    updated_at: datetime


class AudioFileCheckResponse(BaseModel):
    message: str
    audio_file: Optional[AudioFileResponse] = None


class PlaybackUrlResponse(BaseModel):
    url: str
    expires_in: int

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
