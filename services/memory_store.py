# services/memory_store.py
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from models.chat import ChatMessage, User
from services.store import ChatStore, UsernameTakenError


class InMemoryStore(ChatStore):
    """Process-local store. Data is lost on restart."""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.messages: List[ChatMessage] = []

    async def user_exists(self, username: str) -> bool:
        return username in self.users

    async def get_user_by_username(self, username: str) -> Optional[User]:
        return self.users.get(username)

    async def create_user(self, user: User) -> User:
        if user.username in self.users:
            raise UsernameTakenError(user.username)
        self.users[user.username] = user
        return user

    async def create_chat_message(self, message: ChatMessage) -> ChatMessage:
        self.messages.append(message)
        return message

    async def get_chat_messages(self, user_id: str) -> List[ChatMessage]:
        owned = [m for m in self.messages if m.user_id == user_id]
        # sorted() is stable, so same-instant messages keep insertion order
        return sorted(owned, key=lambda m: m.created_at)

    async def health_check(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "message": "In-memory store",
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
