# models/chat.py
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
import uuid


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(BaseModel):
    id: str = Field(default_factory=_new_id)
    username: str
    password_hash: str
    created_at: datetime = Field(default_factory=_utcnow)


class ChatMessage(BaseModel):
    """One side of a chat turn. Serialized with the camelCase names the web client reads."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=_new_id)
    user_id: str = Field(alias="userId")
    message: str
    is_user_message: bool = Field(alias="isUserMessage")
    created_at: datetime = Field(default_factory=_utcnow, alias="createdAt")
