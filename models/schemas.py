# models/schemas.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class Credentials(BaseModel):
    """For registration and login. Fields are optional so missing ones come back as a 400"""
    username: Optional[str] = None
    password: Optional[str] = None

class AuthResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    token: str
    user_id: str = Field(alias="userId")
    username: str

class ChatRequest(BaseModel):
    message: Optional[str] = None

class ChatResponse(BaseModel):
    response: str

class HealthResponse(BaseModel):
    status: str
    database: str
    environment: str

class TokenClaims(BaseModel):
    """Identity carried by a verified session token"""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    username: str
    exp: int
    iat: Optional[int] = None
